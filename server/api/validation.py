"""
Boundary validation for experiment records.

The storage schema does not enforce presence of the narrative fields, so the
checks here are the only guard between request bodies and the table.
"""

import re
from typing import Any, List, Optional

from pydantic import BaseModel, Field

REQUIRED_FIELDS = ("title", "summary", "what_tried", "what_went_wrong", "what_learned")
OPTIONAL_FIELDS = ("tags", "author_name")

_POSITIVE_INT = re.compile(r"^[0-9]+$")


class ExperimentValidationError(Exception):
    """Raised when a request fails boundary validation."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class ExperimentCreate(BaseModel):
    """A validated create request."""
    title: str = Field(..., description="Experiment title")
    summary: str = Field(..., description="One-line summary")
    what_tried: str = Field(..., description="What was tried")
    what_went_wrong: str = Field(..., description="What went wrong")
    what_learned: str = Field(..., description="What was learned")
    tags: Optional[str] = Field(None, description="Comma-separated tags")
    author_name: Optional[str] = Field(None, description="Author name or handle")


def validate_create_payload(payload: Any) -> ExperimentCreate:
    """
    Validate a decoded JSON body for the create operation.

    Required fields must be present and truthy. Values are not trimmed, so a
    whitespace-only string counts as present.

    Raises:
        ExperimentValidationError: on missing or mistyped fields
    """
    data = payload if isinstance(payload, dict) else {}

    missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
    if missing:
        raise ExperimentValidationError("Missing required fields", missing)

    mistyped = [name for name in REQUIRED_FIELDS if not isinstance(data[name], str)]
    mistyped += [
        name for name in OPTIONAL_FIELDS
        if data.get(name) is not None and not isinstance(data[name], str)
    ]
    if mistyped:
        raise ExperimentValidationError("Invalid field types", mistyped)

    return ExperimentCreate(**{name: data.get(name) for name in REQUIRED_FIELDS + OPTIONAL_FIELDS})


def parse_experiment_id(raw: str) -> int:
    """
    Parse a path-supplied identifier into a positive integer.

    Raises:
        ExperimentValidationError: if the value is not a positive decimal integer
    """
    candidate = raw.strip()
    if not _POSITIVE_INT.match(candidate):
        raise ExperimentValidationError("Invalid experiment id")

    value = int(candidate)
    if value <= 0:
        raise ExperimentValidationError("Invalid experiment id")
    return value
