"""Upload response schema."""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Location of a stored image."""

    url: str = Field(..., description="Relative URL under the static upload path")
