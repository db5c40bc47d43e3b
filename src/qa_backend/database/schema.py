"""
Schema setup for QA test submissions
"""

import logging

logger = logging.getLogger(__name__)

TABLE_NAMES = (
    "testers",
    "submissions",
    "test_sections",
    "feature_tests",
    "bug_reports",
    "screenshots",
)

# Parents before children
SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS testers (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        role VARCHAR(50) NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS submissions (
        id SERIAL PRIMARY KEY,
        tester_id INTEGER REFERENCES testers(id),
        submission_date DATE NOT NULL,
        overall_rating INTEGER CHECK (overall_rating >= 0 AND overall_rating <= 100),
        final_suggestions TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS test_sections (
        id SERIAL PRIMARY KEY,
        submission_id INTEGER REFERENCES submissions(id),
        section_name VARCHAR(50) NOT NULL,
        uiux_rating INTEGER CHECK (uiux_rating >= 0 AND uiux_rating <= 100),
        comments TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS feature_tests (
        id SERIAL PRIMARY KEY,
        section_id INTEGER REFERENCES test_sections(id),
        feature_name VARCHAR(255) NOT NULL,
        test_status VARCHAR(20) NOT NULL CHECK (test_status IN ('Pass', 'Fail', 'Not Tested'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bug_reports (
        id SERIAL PRIMARY KEY,
        submission_id INTEGER REFERENCES submissions(id),
        priority VARCHAR(20) NOT NULL CHECK (priority IN ('Critical', 'High', 'Medium', 'Low')),
        description TEXT NOT NULL,
        screenshot_url VARCHAR(500),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    # Not written by any endpoint yet; cleared on submission delete
    """
    CREATE TABLE IF NOT EXISTS screenshots (
        id SERIAL PRIMARY KEY,
        section_id INTEGER REFERENCES test_sections(id),
        file_name VARCHAR(255) NOT NULL,
        file_url VARCHAR(500) NOT NULL,
        file_size INTEGER,
        uploaded_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_submissions_tester_id ON submissions(tester_id)",
    "CREATE INDEX IF NOT EXISTS idx_test_sections_submission_id ON test_sections(submission_id)",
    "CREATE INDEX IF NOT EXISTS idx_feature_tests_section_id ON feature_tests(section_id)",
    "CREATE INDEX IF NOT EXISTS idx_bug_reports_submission_id ON bug_reports(submission_id)",
    "CREATE INDEX IF NOT EXISTS idx_bug_reports_priority ON bug_reports(priority)",
    "CREATE INDEX IF NOT EXISTS idx_screenshots_section_id ON screenshots(section_id)",
]


async def ensure_schema(database):
    """
    Create tables and indexes if they don't exist.

    Safe to run on every start. Any failure is re-raised so the server
    never starts serving against a partial schema.
    """
    async with database.acquire() as conn:
        try:
            async with conn.transaction():
                for statement in SCHEMA_STATEMENTS:
                    await conn.execute(statement)
        except Exception as e:
            logger.error(f"Error initializing database: {e}", exc_info=True)
            raise

    logger.info(f"Database tables initialized successfully ({len(TABLE_NAMES)} tables)")
