"""
Tagged states for the submit, list and detail flows.

Every client call resolves to exactly one of these variants and the pages
switch on them exhaustively.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class Idle:
    """Form shown with nothing submitted yet."""
    kind: ClassVar[str] = "idle"


@dataclass(frozen=True)
class Submitted:
    """Create request accepted by the store."""
    experiment_id: int
    kind: ClassVar[str] = "submitted"


@dataclass(frozen=True)
class SubmitFailed:
    """Create request rejected or not delivered."""
    message: str
    kind: ClassVar[str] = "failed"


SubmitState = Union[Idle, Submitted, SubmitFailed]


@dataclass(frozen=True)
class Loaded:
    """Read request succeeded."""
    value: Any
    kind: ClassVar[str] = "loaded"


@dataclass(frozen=True)
class NotFound:
    """The store has no record with the requested identifier."""
    message: str = "Experiment not found."
    kind: ClassVar[str] = "not_found"


@dataclass(frozen=True)
class LoadFailed:
    """Read request failed for any other reason."""
    message: str
    kind: ClassVar[str] = "failed"


LoadState = Union[Loaded, NotFound, LoadFailed]
