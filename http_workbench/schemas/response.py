"""
Pydantic schemas for dispatch results.
"""

from pydantic import BaseModel, Field


class ResponseRecord(BaseModel):
    """
    Schema for the result of a dispatched request.

    Any status code is a normal result, including 4xx and 5xx.
    """
    status: int = Field(ge=0, le=65535)
    body: str
    response_time_ms: float = Field(ge=0)
