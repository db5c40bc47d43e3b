"""
Entry point for the QA Testing Backend
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

from qa_backend.app import app
from qa_backend.config.settings import get_settings

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting QA Testing Backend on port {settings.port} ({settings.environment})")
    logger.info(f"Health check: http://localhost:{settings.port}/health")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
