"""Presentation helpers shared by the list and detail pages."""

from datetime import datetime, timezone, tzinfo
from typing import List, Optional

ANONYMOUS = "Anonymous"


def parse_tags(tags: Optional[str]) -> List[str]:
    """Split a comma-separated tag string into trimmed, non-empty labels in order."""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def display_author(author_name: Optional[str]) -> str:
    """Author as shown to readers; blank or missing names become Anonymous."""
    if author_name is None:
        return ANONYMOUS
    return author_name.strip() or ANONYMOUS


def format_date(value: str, tz: Optional[tzinfo] = None, include_time: bool = False) -> str:
    """
    Render a timestamp string for display.

    Timestamps without a zone designator are taken as UTC, then converted to
    ``tz`` (UTC when omitted). Anything that does not parse is returned as-is.
    """
    normalized = value.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(normalized)
    except (TypeError, ValueError):
        return value

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    local = parsed.astimezone(tz or timezone.utc)

    text = f"{local.strftime('%b')} {local.day:02d}, {local.year}"
    if include_time:
        text += f", {local.strftime('%H:%M')}"
    return text
