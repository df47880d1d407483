"""Pydantic models for the request and response envelopes."""

from pydantic import BaseModel, Field, StrictStr


class PromptIn(BaseModel):
    """Incoming chat request body."""

    prompt: StrictStr = Field(min_length=1, description="User supplied text prompt.")


class ChatResponse(BaseModel):
    """Successful chat reply."""

    response: str


class ErrorResponse(BaseModel):
    """Error body returned for any failed chat request."""

    error: str
    details: str | None = None
