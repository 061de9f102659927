from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class GenerateNotesRequest(BaseModel):
    """Model for requesting study notes for a video."""
    video_url: Optional[str] = Field(None, alias="videoUrl")
    video_type: Optional[str] = Field("General", alias="videoType")
    transcript_override: Optional[str] = Field(None, alias="transcriptOverride")

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Model for service health responses."""
    status: str = "ok"
    name: str
    version: str
