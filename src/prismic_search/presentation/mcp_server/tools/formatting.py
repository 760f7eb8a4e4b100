"""
Result rendering for MCP tool responses.

Rows mirror the Prismic document list: title (summary), type, last update and
a link into the writing room.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from prismic_search.domain.entities import SummaryKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from prismic_search.domain.entities import ResultRecord

FALLBACK_LABEL = "Document"
EMPTY_STATE = (
    "## No content matching this request\n\n"
    "Try to search using other tags, types, authors or keyword."
)
DOCUMENT_PATH = "/documents~b=working&c=unclassified/{id}/"


def summary_label(record: ResultRecord) -> str:
    """Human-readable title of a record, whatever shape its summary has."""
    match record.summary_kind:
        case SummaryKind.TEXT:
            return str(record.summary) or FALLBACK_LABEL
        case SummaryKind.RICH_TEXT:
            return record.summary.text or FALLBACK_LABEL  # type: ignore[union-attr]
        case _:
            return FALLBACK_LABEL


def document_path(document_id: str) -> str:
    return DOCUMENT_PATH.format(id=document_id)


def relative_time(moment: datetime | None, now: datetime | None = None) -> str:
    """``3 days ago``-style description of ``moment``."""
    if moment is None:
        return "never"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    seconds = (now - moment).total_seconds()
    future = seconds < 0
    seconds = abs(seconds)

    minutes = seconds / 60
    hours = minutes / 60
    days = hours / 24

    if seconds < 45:
        text = "a few seconds"
    elif seconds < 90:
        text = "a minute"
    elif minutes < 45:
        text = f"{round(minutes)} minutes"
    elif minutes < 90:
        text = "an hour"
    elif hours < 22:
        text = f"{round(hours)} hours"
    elif hours < 36:
        text = "a day"
    elif days < 26:
        text = f"{round(days)} days"
    elif days < 45:
        text = "a month"
    elif days < 320:
        text = f"{round(days / 30.4)} months"
    elif days < 548:
        text = "a year"
    else:
        text = f"{round(days / 365.25)} years"

    return f"in {text}" if future else f"{text} ago"


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def format_results_markdown(records: Sequence[ResultRecord], now: datetime | None = None) -> str:
    """Markdown table of records, or the empty state."""
    if not records:
        return EMPTY_STATE

    lines = [
        f"**{len(records)} document(s)**",
        "",
        "| Name | Type | Last update | Link |",
        "|------|------|-------------|------|",
    ]
    for record in records:
        lines.append(
            f"| {_cell(summary_label(record))} | {_cell(record.type)} | "
            f"{relative_time(record.published_at, now)} | {document_path(record.id)} |"
        )
    return "\n".join(lines)
