"""Tests for interactive database and course selection."""

import pytest
from unittest.mock import MagicMock

from notion_canvas_sync.prompts import (
    PromptCancelled,
    Prompter,
    Selection,
    SelectionError,
    collect_selection,
    select_courses,
    select_database,
    select_parent_page,
)


def scripted(*answers):
    """Prompter fed from a fixed list of answers, capturing output."""
    replies = iter(answers)
    output = []
    return Prompter(input_func=lambda _: next(replies), output_func=output.append), output


def database_result(database_id, title):
    return {"object": "database", "id": database_id, "title": [{"plain_text": title}]}


def page_result(page_id, title):
    return {
        "object": "page",
        "id": page_id,
        "properties": {"title": {"type": "title", "title": [{"plain_text": title}]}},
    }


class TestPrompter:
    """Tests for the Prompter menus."""

    def test_ask_returns_answer(self):
        prompter, _ = scripted("hello")

        assert prompter.ask("Say something?") == "hello"

    @pytest.mark.parametrize("error", [KeyboardInterrupt, EOFError])
    def test_ask_cancel_raises(self, error):
        """Ctrl+C and end of input become PromptCancelled."""
        prompter = Prompter(input_func=MagicMock(side_effect=error))

        with pytest.raises(PromptCancelled):
            prompter.ask("Name?")

    def test_choose_returns_value(self):
        prompter, output = scripted("2")

        value = prompter.choose("Pick one", [("A", "a"), ("B", "b")])

        assert value == "b"
        assert "  2) B" in output

    def test_choose_reprompts_on_invalid_answer(self):
        """Out-of-range, non-numeric and multiple answers are rejected."""
        prompter, output = scripted("5", "x", "1,2", "1")

        assert prompter.choose("Pick one", [("A", "a"), ("B", "b")]) == "a"
        assert output.count("Please enter a single number from the list.") == 3

    def test_choose_with_no_choices_raises(self):
        prompter, _ = scripted()

        with pytest.raises(SelectionError):
            prompter.choose("Pick one", [])

    def test_choose_many_keeps_list_order(self):
        prompter, _ = scripted("3, 1")

        values = prompter.choose_many("Pick", [("A", 1), ("B", 2), ("C", 3)])

        assert values == [1, 3]

    def test_choose_many_blank_selects_nothing(self):
        prompter, _ = scripted("")

        assert prompter.choose_many("Pick", [("A", 1)]) == []

    def test_choose_many_reprompts_on_invalid(self):
        prompter, output = scripted("0", "2")

        assert prompter.choose_many("Pick", [("A", 1), ("B", 2)]) == [2]
        assert len([line for line in output if line.startswith("Please")]) == 1


class TestSelectDatabase:
    """Tests for select_database."""

    def test_selects_existing_database(self):
        mock_notion = MagicMock()
        mock_notion.search.return_value = {"results": [database_result("db1", "Homework")]}
        prompter, output = scripted("Homework", "1")

        assert select_database(mock_notion, prompter) == "db1"
        assert "  2) Create new database" in output
        mock_notion.databases.create.assert_not_called()

    def test_creates_new_database(self):
        """Choosing create searches for a parent page and names the database."""
        mock_notion = MagicMock()
        mock_notion.search.side_effect = [
            {"results": [database_result("db1", "Homework")]},
            {"results": [page_result("page1", "School")]},
        ]
        mock_notion.databases.create.return_value = {"id": "db-new"}
        prompter, _ = scripted("Homework", "2", "School", "1", "Canvas Assignments")

        assert select_database(mock_notion, prompter) == "db-new"

        kwargs = mock_notion.databases.create.call_args.kwargs
        assert kwargs["parent"] == {"type": "page_id", "page_id": "page1"}
        assert kwargs["title"][0]["text"]["content"] == "Canvas Assignments"

    def test_no_matches_still_offers_create(self):
        mock_notion = MagicMock()
        mock_notion.search.side_effect = [
            {"results": []},
            {"results": [page_result("page1", "School")]},
        ]
        mock_notion.databases.create.return_value = {"id": "db-new"}
        prompter, _ = scripted("Nothing", "1", "School", "1", "New")

        assert select_database(mock_notion, prompter) == "db-new"


class TestSelectParentPage:
    """Tests for select_parent_page."""

    def test_no_pages_found_raises(self):
        mock_notion = MagicMock()
        mock_notion.search.return_value = {"results": []}
        prompter, _ = scripted("Missing")

        with pytest.raises(SelectionError, match="No pages found"):
            select_parent_page(mock_notion, prompter)


class TestSelectCourses:
    """Tests for select_courses and collect_selection."""

    def make_canvas(self):
        mock_course1 = MagicMock()
        mock_course1.id = 123
        mock_course1.name = "CS 101"
        mock_course2 = MagicMock()
        mock_course2.id = 456
        mock_course2.name = "MATH 241"
        mock_canvas = MagicMock()
        mock_canvas.get_courses.return_value = [mock_course1, mock_course2]
        return mock_canvas

    def test_returns_selected_course_ids(self):
        prompter, output = scripted("2")

        assert select_courses(self.make_canvas(), prompter) == [456]
        assert "  1) CS 101" in output

    def test_collect_selection(self):
        mock_notion = MagicMock()
        mock_notion.search.return_value = {"results": [database_result("db1", "Homework")]}
        prompter, _ = scripted("Homework", "1", "1,2")

        selection = collect_selection(self.make_canvas(), mock_notion, prompter)

        assert selection == Selection(database_id="db1", course_ids=[123, 456])
