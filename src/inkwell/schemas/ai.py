"""AI assistant request/response schemas."""

from pydantic import BaseModel, Field


class AIRequest(BaseModel):
    """Free-text input shared by every assistant tool."""

    topic: str | None = Field(None, description="Topic to brainstorm around")
    content: str | None = Field(None, description="Draft text to transform")
    tone: str = Field("professional", description="Desired writing tone")


class AIResponse(BaseModel):
    """Raw text returned by the completion provider."""

    content: str
