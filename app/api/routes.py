"""
API routes for the YouTube study notes application.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.api.schems import GenerateNotesRequest, HealthResponse
from app.config import config
from app.core.pipeline import NotesPipeline
from app.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["notes"])


def get_pipeline() -> NotesPipeline:
    """Pipeline dependency, overridable in tests."""
    return NotesPipeline()


@router.post("/generate-notes")
def generate_notes(
    request: GenerateNotesRequest,
    pipeline: NotesPipeline = Depends(get_pipeline),
) -> Dict[str, Any]:
    """
    Generate study notes for a YouTube video.

    Always answers 200; success or failure is carried in the body.
    """
    logging.info(f"Notes requested for {request.video_url} ({request.video_type})")
    return pipeline.run(
        request.video_url,
        video_type=request.video_type,
        transcript_override=request.transcript_override,
    )


@router.get("/health", response_model=HealthResponse)
def health():
    """Report service name and version."""
    return HealthResponse(name=config.APP_NAME, version=config.APP_VERSION)
