"""
QA submission API routes
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from qa_backend.api.dependencies import get_submissions_service
from qa_backend.models.submission import SubmissionCreate
from qa_backend.services.submissions_service import SubmissionsService

router = APIRouter()
logger = logging.getLogger(__name__)

def _failure_response(error: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"success": False, "error": error})

@router.post("")
async def create_submission(
    submission: SubmissionCreate,
    submissions_service: SubmissionsService = Depends(get_submissions_service)
):
    """Save a new QA submission"""
    result = await submissions_service.create_submission(submission)

    if not result.success:
        logger.error(f"Error saving submission: {result.error_type}")
        return _failure_response("Failed to save submission")

    return {
        "success": True,
        "message": "Submission saved successfully",
        "submissionId": result.data[0]["submission_id"]
    }

@router.get("")
async def list_submissions(
    submissions_service: SubmissionsService = Depends(get_submissions_service)
):
    """Get all submissions, newest first"""
    result = await submissions_service.list_submissions()

    if not result.success:
        logger.error(f"Error fetching submissions: {result.error_type}")
        return _failure_response("Failed to fetch submissions")

    return result.data

@router.delete("/{submission_id}")
async def delete_submission(
    submission_id: int,
    submissions_service: SubmissionsService = Depends(get_submissions_service)
):
    """Delete a submission and all associated data"""
    result = await submissions_service.delete_submission(submission_id)

    if not result.success:
        logger.error(f"Error deleting submission {submission_id}: {result.error_type}")
        return _failure_response("Failed to delete submission")

    return {
        "success": True,
        "message": "Submission deleted successfully"
    }
