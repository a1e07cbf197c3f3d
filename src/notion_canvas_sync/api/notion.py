"""Notion search, database and page operations used by the sync."""

import logging
from typing import Any

from notion_client import Client
from notion_client.errors import APIResponseError, HTTPResponseError, RequestTimeoutError
from notion_client.helpers import collect_paginated_api

from notion_canvas_sync.config import DATABASE_SCHEMA, DEFAULT_TITLE

NOTION_ERRORS = (APIResponseError, HTTPResponseError, RequestTimeoutError)


def is_notion_client_error(error: BaseException) -> bool:
    """Return True if error was raised by the Notion client."""
    return isinstance(error, NOTION_ERRORS)


def _search(notion: Client, query: str, object_type: str) -> list[dict[str, Any]]:
    response = notion.search(
        query=query,
        filter={"value": object_type, "property": "object"},
    )
    return [r for r in response.get("results", []) if r.get("object") == object_type]


def search_databases(notion: Client, query: str) -> list[dict[str, Any]]:
    """Search databases shared with the integration by title."""
    return _search(notion, query, "database")


def search_pages(notion: Client, query: str) -> list[dict[str, Any]]:
    """Search pages shared with the integration by title."""
    return _search(notion, query, "page")


def _plain_text(rich_text: list[dict[str, Any]]) -> str:
    return "".join(part.get("plain_text", "") for part in rich_text)


def database_title(database: dict[str, Any]) -> str:
    return _plain_text(database.get("title") or []) or DEFAULT_TITLE


def page_title(page: dict[str, Any]) -> str:
    """Get the title of a page from its Name or title property.

    Pages without a title property are shown as "Untitled".
    """
    properties = page.get("properties", {})
    prop = properties.get("Name") or properties.get("title")
    if not prop or prop.get("type") != "title":
        logging.debug("Page %s does not have a title", page.get("id"))
        return DEFAULT_TITLE
    return _plain_text(prop.get("title") or []) or DEFAULT_TITLE


def create_database(notion: Client, parent_page_id: str, name: str) -> str:
    """Create an assignments database under a page.

    Returns:
        Id of the new database
    """
    database = notion.databases.create(
        parent={"type": "page_id", "page_id": parent_page_id},
        title=[{"type": "text", "text": {"content": name}}],
        properties=DATABASE_SCHEMA,
    )
    logging.info("Created database %s (%s)", name, database["id"])
    return database["id"]


def query_database(notion: Client, database_id: str) -> list[dict[str, Any]]:
    """Fetch every row of a database, following pagination."""
    return collect_paginated_api(notion.databases.query, database_id=database_id)


def create_page(
    notion: Client, database_id: str, properties: dict[str, Any]
) -> dict[str, Any]:
    return notion.pages.create(
        parent={"database_id": database_id},
        properties=properties,
    )


def update_page(
    notion: Client, page_id: str, properties: dict[str, Any]
) -> dict[str, Any]:
    return notion.pages.update(page_id=page_id, properties=properties)
