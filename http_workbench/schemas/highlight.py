"""
Pydantic schemas for syntax highlighting.
"""

from pydantic import BaseModel


class HighlightRequest(BaseModel):
    """Schema for a block of text to highlight."""
    code: str
    language: str


class HighlightResponse(BaseModel):
    """Schema for rendered markup."""
    html: str
