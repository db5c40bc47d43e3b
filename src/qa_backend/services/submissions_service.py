"""
Submission service - write, read and delete QA test submissions
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List

import asyncpg

from qa_backend.models.submission import SectionInput, SubmissionCreate
from qa_backend.services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)

LIST_SUBMISSIONS_SQL = """
    SELECT
        s.id,
        s.submission_date,
        s.overall_rating,
        s.final_suggestions,
        s.created_at,
        t.name AS tester_name,
        t.role AS tester_role,
        COALESCE(
            json_agg(
                json_build_object(
                    'section_name', ts.section_name,
                    'uiux_rating', ts.uiux_rating,
                    'comments', ts.comments,
                    'features', COALESCE((
                        SELECT json_agg(
                            json_build_object(
                                'feature_name', ft.feature_name,
                                'test_status', ft.test_status
                            )
                            ORDER BY ft.id
                        )
                        FROM feature_tests ft
                        WHERE ft.section_id = ts.id
                    ), '[]'::json)
                )
                ORDER BY ts.id
            ) FILTER (WHERE ts.id IS NOT NULL),
            '[]'::json
        ) AS sections,
        COALESCE((
            SELECT json_agg(
                json_build_object(
                    'priority', br.priority,
                    'description', br.description,
                    'screenshot_url', br.screenshot_url,
                    'created_at', br.created_at
                )
                ORDER BY br.id
            )
            FROM bug_reports br
            WHERE br.submission_id = s.id
        ), '[]'::json) AS bug_reports
    FROM submissions s
    JOIN testers t ON s.tester_id = t.id
    LEFT JOIN test_sections ts ON s.id = ts.submission_id
    GROUP BY s.id, t.name, t.role
    ORDER BY s.created_at DESC, s.id DESC
"""

# Children first so no foreign key is left dangling
DELETE_SUBMISSION_STATEMENTS = [
    "DELETE FROM feature_tests WHERE section_id IN (SELECT id FROM test_sections WHERE submission_id = $1)",
    "DELETE FROM screenshots WHERE section_id IN (SELECT id FROM test_sections WHERE submission_id = $1)",
    "DELETE FROM test_sections WHERE submission_id = $1",
    "DELETE FROM bug_reports WHERE submission_id = $1",
    "DELETE FROM submissions WHERE id = $1",
]


def _isoformat(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def submission_view(row) -> Dict[str, Any]:
    """Shape one aggregated row like the frontend form"""
    return {
        "id": row["id"],
        "testerInfo": {
            "name": row["tester_name"],
            "role": row["tester_role"],
            "date": _isoformat(row["submission_date"]),
        },
        "finalFeedback": {
            "overallRating": row["overall_rating"],
            "suggestions": row["final_suggestions"],
        },
        "sections": row["sections"] or [],
        "bugReports": row["bug_reports"] or [],
        "submittedAt": _isoformat(row["created_at"]),
    }


class SubmissionsService(BaseService):
    """Persists QA submissions across the tester/section/feature/bug tables"""

    async def create_submission(self, submission: SubmissionCreate) -> ServiceResult:
        """
        Store a submission and all of its nested rows in one transaction

        Args:
            submission: Validated submission payload

        Returns:
            ServiceResult with [{"submission_id": ...}] on success
        """
        tester = submission.tester_info
        logger.info(
            f"Saving submission from tester '{tester.name}' "
            f"({len(submission.sections())} sections, {len(submission.bug_reports)} bug reports)"
        )

        try:
            async with self.database.acquire() as conn:
                async with conn.transaction():
                    tester_id = await conn.fetchval(
                        "INSERT INTO testers (name, role) VALUES ($1, $2) RETURNING id",
                        tester.name, tester.role
                    )

                    submission_id = await conn.fetchval("""
                        INSERT INTO submissions (tester_id, submission_date, overall_rating, final_suggestions)
                        VALUES ($1, $2, $3, $4)
                        RETURNING id
                    """,
                    tester_id, tester.submission_date,
                    submission.final_feedback.overall_rating,
                    submission.final_feedback.suggestions)

                    for section_key, section in submission.sections():
                        await self._insert_section(conn, submission_id, section_key.value, section)

                    await self._insert_bug_reports(conn, submission_id, submission)

        except Exception as e:
            return self._failure("Saving submission", e)

        logger.info(f"Submission {submission_id} saved successfully")
        return ServiceResult(
            success=True,
            data=[{"submission_id": submission_id, "tester_id": tester_id}],
            count=1
        )

    async def _insert_section(
        self,
        conn: asyncpg.Connection,
        submission_id: int,
        section_name: str,
        section: SectionInput
    ) -> int:
        section_id = await conn.fetchval("""
            INSERT INTO test_sections (submission_id, section_name, uiux_rating, comments)
            VALUES ($1, $2, $3, $4)
            RETURNING id
        """,
        submission_id, section_name, section.rating, section.comments_or_default)

        if section.features:
            await conn.executemany(
                "INSERT INTO feature_tests (section_id, feature_name, test_status) VALUES ($1, $2, $3)",
                [
                    (section_id, feature_name, result.status.value)
                    for feature_name, result in section.features.items()
                ]
            )

        return section_id

    async def _insert_bug_reports(
        self,
        conn: asyncpg.Connection,
        submission_id: int,
        submission: SubmissionCreate
    ):
        if not submission.bug_reports:
            return

        await conn.executemany(
            "INSERT INTO bug_reports (submission_id, priority, description, screenshot_url) VALUES ($1, $2, $3, $4)",
            [
                (submission_id, bug.priority.value, bug.description, bug.screenshot or None)
                for bug in submission.bug_reports
            ]
        )

    async def list_submissions(self) -> ServiceResult:
        """All submissions with nested sections and bug reports, newest first"""
        try:
            rows = await self.database.query(LIST_SUBMISSIONS_SQL)
        except Exception as e:
            return self._failure("Fetching submissions", e)

        views: List[Dict[str, Any]] = [submission_view(row) for row in rows]
        return ServiceResult(success=True, data=views, count=len(views))

    async def delete_submission(self, submission_id: int) -> ServiceResult:
        """
        Delete a submission and everything referencing it

        A missing submission deletes nothing and still succeeds. Tester
        rows are kept.
        """
        logger.info(f"Deleting submission {submission_id}")

        try:
            async with self.database.acquire() as conn:
                async with conn.transaction():
                    for statement in DELETE_SUBMISSION_STATEMENTS:
                        status = await conn.execute(statement, submission_id)
                        logger.debug(f"{status} for submission {submission_id}")
        except Exception as e:
            return self._failure(f"Deleting submission {submission_id}", e)

        return ServiceResult(
            success=True,
            data=[{"submission_id": submission_id, "deleted": status != "DELETE 0"}],
            count=1
        )
