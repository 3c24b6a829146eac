"""
Client-side shapes of the records returned by the experiments API.

Timestamps stay as the strings the server sent; formatting happens at render
time.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ExperimentListItem(BaseModel):
    """One row of the list response."""
    id: int
    title: str
    summary: str
    tags: Optional[str] = None
    author_name: Optional[str] = None
    created_at: str = Field(..., description="Timestamp as sent by the server")


class ExperimentRecord(ExperimentListItem):
    """A full record from the read-by-identifier response."""
    what_tried: str
    what_went_wrong: str
    what_learned: str
