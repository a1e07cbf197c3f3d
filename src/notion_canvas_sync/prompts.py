"""Interactive selection of the target database and courses.

Everything that talks to the terminal lives here. The result of the
interactive phase is a plain Selection so the sync itself can run without
a terminal.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from notion_canvas_sync.api import notion as notion_api
from notion_canvas_sync.api.canvas import list_courses

NEW_DATABASE = "new"


class PromptCancelled(Exception):
    """Raised when the user aborts a prompt (Ctrl+C or end of input)."""


class SelectionError(Exception):
    """Raised when a selection cannot be made, e.g. nothing to choose from."""


@dataclass
class Selection:
    database_id: str
    course_ids: list[int] = field(default_factory=list)


class Prompter:
    """Text prompts and numbered menus on stdin/stdout."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        self.input = input_func
        self.output = output_func

    def ask(self, message: str) -> str:
        try:
            return self.input(f"{message} ")
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled(message) from e

    def _show(self, message: str, choices: list[tuple[str, Any]]) -> None:
        self.output(message)
        for number, (label, _) in enumerate(choices, start=1):
            self.output(f"  {number}) {label}")

    def _parse(self, answer: str, count: int) -> list[int] | None:
        try:
            numbers = [int(part) for part in answer.replace(",", " ").split()]
        except ValueError:
            return None
        if any(n < 1 or n > count for n in numbers):
            return None
        return numbers

    def choose(self, message: str, choices: list[tuple[str, Any]]) -> Any:
        """Pick exactly one choice, returning its value."""
        if not choices:
            raise SelectionError(f"Nothing to choose from: {message}")
        self._show(message, choices)
        while True:
            numbers = self._parse(self.ask(f"Choice (1-{len(choices)}):"), len(choices))
            if numbers and len(numbers) == 1:
                return choices[numbers[0] - 1][1]
            self.output("Please enter a single number from the list.")

    def choose_many(self, message: str, choices: list[tuple[str, Any]]) -> list[Any]:
        """Pick any number of choices, returning their values in list order."""
        if not choices:
            return []
        self._show(message, choices)
        while True:
            answer = self.ask("Choices (e.g. 1,3), blank for none:")
            numbers = self._parse(answer, len(choices))
            if numbers is not None:
                picked = set(numbers)
                return [value for n, (_, value) in enumerate(choices, start=1) if n in picked]
            self.output("Please enter numbers from the list separated by commas.")


def select_parent_page(notion: Any, prompter: Prompter) -> str:
    """Search for a page to hold a new database and let the user pick it."""
    query = prompter.ask("What would you like to search for?")
    pages = notion_api.search_pages(notion, query)
    if not pages:
        raise SelectionError(f"No pages found matching {query!r}")

    options = [(notion_api.page_title(page), page["id"]) for page in pages]
    return prompter.choose("Which page would you like to add the database to?", options)


def create_new_database(notion: Any, prompter: Prompter) -> str:
    parent_page_id = select_parent_page(notion, prompter)
    name = prompter.ask("What would you like to name the database?")
    return notion_api.create_database(notion, parent_page_id, name)


def select_database(notion: Any, prompter: Prompter) -> str:
    """Find an existing database by name, or create a new one.

    Returns:
        Id of the database to add assignments to
    """
    query = prompter.ask(
        "What is the name of the database you add canvas assessments to?"
    )
    databases = notion_api.search_databases(notion, query)

    options = [(notion_api.database_title(db), db["id"]) for db in databases]
    options.append(("Create new database", NEW_DATABASE))

    choice = prompter.choose(
        "Which database would you like to add the assessment to?", options
    )
    if choice != NEW_DATABASE:
        return choice
    return create_new_database(notion, prompter)


def select_courses(canvas: Any, prompter: Prompter) -> list[int]:
    courses = list_courses(canvas)
    options = [(getattr(c, "name", None) or f"Course {c.id}", c.id) for c in courses]
    return prompter.choose_many(
        "Which courses would you like to add assessments from?", options
    )


def collect_selection(canvas: Any, notion: Any, prompter: Prompter) -> Selection:
    database_id = select_database(notion, prompter)
    course_ids = select_courses(canvas, prompter)
    logging.debug("Selected database %s and courses %s", database_id, course_ids)
    return Selection(database_id=database_id, course_ids=course_ids)
