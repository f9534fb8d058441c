"""Schemas shared by several domains."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by mutating endpoints and errors."""

    message: str = Field(..., example="Card created successfully")
