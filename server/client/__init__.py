"""
Client side of nullresults.club.

An async HTTP client for the experiments API, the tagged states its calls
resolve to, and the presentation helpers the pages share.
"""

from .api_client import ExperimentApiClient
from .models import ExperimentListItem, ExperimentRecord
from .presentation import parse_tags, format_date, display_author
from .states import (
    Idle,
    Submitted,
    SubmitFailed,
    SubmitState,
    Loaded,
    NotFound,
    LoadFailed,
    LoadState,
)

__all__ = [
    "ExperimentApiClient",
    "ExperimentListItem",
    "ExperimentRecord",
    "parse_tags",
    "format_date",
    "display_author",
    "Idle",
    "Submitted",
    "SubmitFailed",
    "SubmitState",
    "Loaded",
    "NotFound",
    "LoadFailed",
    "LoadState",
]
