"""Diff Canvas assignments against the pages already in a Notion database.

Assignments are joined to pages on the assignment id, compared as a string.
Each id maps to at most one page: the first page seen for an id wins, and
an id is never both created and updated in the same pass.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from notion_canvas_sync.config import (
    DEFAULT_TITLE,
    PROP_ASSIGNMENT_ID,
    PROP_DUE_DATE,
    PROP_NAME,
    PROP_SUBJECT_ID,
    PROP_URL,
    SENTINEL_ASSIGNMENT_NAME,
)
from notion_canvas_sync.sync.utils import (
    date_property,
    now_iso,
    number_property,
    read_date,
    read_url,
    rich_text_property,
    same_instant,
    title_property,
    url_property,
)


@dataclass
class Assignment:
    """An assignment as returned by Canvas."""

    id: int | None
    name: str | None = None
    due_at: str | None = None
    course_id: int | None = None
    html_url: str | None = None


@dataclass
class DatabaseEntry:
    """A Notion page that carries a numeric Assignment Id."""

    page_id: str
    assignment_id: str
    due_date: str | None = None
    url: str | None = None


@dataclass
class UpdatePayload:
    page_id: str
    properties: dict[str, Any]


@dataclass
class Reconciliation:
    """Writes needed to bring the database in line with Canvas."""

    to_create: list[dict[str, Any]] = field(default_factory=list)
    to_update: list[UpdatePayload] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    skipped: list[Assignment] = field(default_factory=list)


def assignment_key(value: Any) -> str | None:
    """Join key for an assignment id, None when the id is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return None


def existing_entries(pages: Iterable[dict[str, Any]]) -> list[DatabaseEntry]:
    """Build entries from raw database rows.

    Rows without properties, and rows whose Assignment Id is missing, empty
    or not a number property, are left out.
    """
    entries = []
    for page in pages:
        properties = page.get("properties")
        if not properties:
            continue

        id_prop = properties.get(PROP_ASSIGNMENT_ID)
        if not id_prop or id_prop.get("type") != "number":
            continue
        key = assignment_key(id_prop.get("number"))
        if key is None:
            continue

        entries.append(
            DatabaseEntry(
                page_id=page["id"],
                assignment_id=key,
                due_date=read_date(properties.get(PROP_DUE_DATE)),
                url=read_url(properties.get(PROP_URL)),
            )
        )
    return entries


def new_page_properties(assignment: Assignment, now: str) -> dict[str, Any]:
    """Page properties for an assignment not yet in the database."""
    name = assignment.name if assignment.name is not None else DEFAULT_TITLE
    course_id = assignment.course_id if assignment.course_id is not None else 0
    return {
        PROP_NAME: title_property(name),
        PROP_DUE_DATE: date_property(assignment.due_at or now),
        PROP_ASSIGNMENT_ID: number_property(int(assignment_key(assignment.id))),
        PROP_SUBJECT_ID: rich_text_property(str(course_id)),
        PROP_URL: url_property(assignment.html_url),
    }


def updated_page(
    assignment: Assignment, entry: DatabaseEntry, now: str
) -> UpdatePayload | None:
    """Due date and URL update for an existing page, None if nothing changed.

    Without a Canvas due date the payload is dated at the current time, and
    is only sent when the URL changed.
    """
    due = assignment.due_at or now
    url = assignment.html_url

    if url == entry.url and (
        assignment.due_at is None or same_instant(due, entry.due_date)
    ):
        return None

    return UpdatePayload(
        page_id=entry.page_id,
        properties={
            PROP_DUE_DATE: date_property(due),
            PROP_URL: url_property(url),
        },
    )


def reconcile(
    assignments: Iterable[Assignment],
    entries: Iterable[DatabaseEntry],
    now: str | None = None,
) -> Reconciliation:
    """Split assignments into pages to create and pages to update.

    Args:
        assignments: Every assignment fetched from Canvas
        entries: Existing database rows with a numeric Assignment Id
        now: Timestamp used for missing due dates, defaults to current time

    Returns:
        Reconciliation with disjoint create and update sets
    """
    now = now or now_iso()

    lookup: dict[str, DatabaseEntry] = {}
    for entry in entries:
        lookup.setdefault(entry.assignment_id, entry)

    result = Reconciliation()
    seen: set[str] = set()

    for assignment in assignments:
        if assignment.name == SENTINEL_ASSIGNMENT_NAME:
            continue

        key = assignment_key(assignment.id)
        if key is None:
            logging.warning(
                "Skipping assignment %r: no numeric id", assignment.name
            )
            result.skipped.append(assignment)
            continue

        if key in seen:
            continue
        seen.add(key)

        entry = lookup.get(key)
        if entry is None:
            result.to_create.append(new_page_properties(assignment, now))
            continue

        update = updated_page(assignment, entry, now)
        if update is None:
            result.unchanged.append(key)
        else:
            result.to_update.append(update)

    logging.debug(
        "Reconciled: %d to create, %d to update, %d unchanged, %d skipped",
        len(result.to_create),
        len(result.to_update),
        len(result.unchanged),
        len(result.skipped),
    )
    return result
