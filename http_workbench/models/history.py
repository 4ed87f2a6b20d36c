"""
History model for storing completed request/response pairs.

Each saved exchange becomes one row. Rows are never updated or deleted.
"""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


class History(Base):
    """
    SQLAlchemy model for request history.

    Attributes:
        id: Auto-incrementing identifier, also the storage order
        method: HTTP method name
        url: Target URL as entered, without the query params appended
        query_params: JSON array of {"key", "value"} objects
        headers: JSON array of {"key", "value"} objects
        body: Request body
        status: HTTP response status code
        response_body: Response body, stored as raw text
        response_time_ms: Elapsed time in milliseconds
        created_at: ISO-8601 UTC timestamp of when the entry was saved
    """
    __tablename__ = "history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    method: Mapped[str] = mapped_column(String(10))
    url: Mapped[str] = mapped_column(Text)
    query_params: Mapped[str] = mapped_column(Text, default="[]")
    headers: Mapped[str] = mapped_column(Text, default="[]")
    body: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[int] = mapped_column(Integer)
    response_body: Mapped[str] = mapped_column(Text, default="")
    response_time_ms: Mapped[float] = mapped_column(Float)
    created_at: Mapped[str] = mapped_column(String(40))
