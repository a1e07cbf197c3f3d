"""Assignment sync from Canvas to a Notion database."""

import logging
from dataclasses import dataclass
from typing import Any

from notion_canvas_sync.api import notion as notion_api
from notion_canvas_sync.api.auth import (
    CredentialStore,
    get_canvas_client,
    get_notion_client,
)
from notion_canvas_sync.api.canvas import fetch_assignments
from notion_canvas_sync.config import SUCCESS
from notion_canvas_sync.prompts import Prompter, Selection, collect_selection
from notion_canvas_sync.sync.reconcile import existing_entries, reconcile
from notion_canvas_sync.sync.utils import run_all


@dataclass
class SyncResult:
    created: int = 0
    updated: int = 0
    skipped: int = 0


def sync_assignments(canvas: Any, notion: Any, selection: Selection) -> SyncResult:
    """Create pages for new assignments and refresh existing ones.

    Returns:
        Counts of pages created and updated, and assignments skipped
    """
    assignments = fetch_assignments(canvas, selection.course_ids)
    logging.info(
        "Fetched %d assignments from %d courses",
        len(assignments),
        len(selection.course_ids),
    )

    pages = notion_api.query_database(notion, selection.database_id)
    entries = existing_entries(pages)
    logging.debug("Database has %d rows, %d with an assignment id", len(pages), len(entries))

    plan = reconcile(assignments, entries)

    created = run_all(
        lambda properties: notion_api.create_page(
            notion, selection.database_id, properties
        ),
        plan.to_create,
    )
    updated = run_all(
        lambda update: notion_api.update_page(notion, update.page_id, update.properties),
        plan.to_update,
    )

    return SyncResult(
        created=sum(1 for page in created if page),
        updated=sum(1 for page in updated if page),
        skipped=len(plan.skipped),
    )


def run(
    store: CredentialStore,
    prompter: Prompter,
    canvas: Any = None,
    notion: Any = None,
) -> SyncResult | None:
    """Run one full sync pass, logging a summary or the error that stopped it.

    Returns:
        SyncResult on success, None if an error was logged
    """
    logging.info("Starting sync")
    try:
        if notion is None:
            notion = get_notion_client(store)
        if canvas is None:
            canvas = get_canvas_client(store)

        selection = collect_selection(canvas, notion, prompter)
        result = sync_assignments(canvas, notion, selection)
    except Exception as e:
        if notion_api.is_notion_client_error(e):
            logging.error("Notion error: %s", e)
        else:
            logging.error("Sync failed: %s", e)
            logging.debug("Traceback for failed sync", exc_info=True)
        return None

    logging.log(
        SUCCESS,
        "Successfully added %d new assignments and updated %d assignments",
        result.created,
        result.updated,
    )
    if result.skipped:
        logging.warning("Skipped %d assignments without an id", result.skipped)
    return result
