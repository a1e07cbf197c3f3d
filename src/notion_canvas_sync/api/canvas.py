"""Canvas course and assignment fetching."""

from typing import Any

from canvasapi import Canvas

from notion_canvas_sync.sync.reconcile import Assignment
from notion_canvas_sync.sync.utils import run_all


def to_assignment(obj: Any) -> Assignment:
    """Convert a canvasapi Assignment object to an Assignment record."""
    return Assignment(
        id=getattr(obj, "id", None),
        name=getattr(obj, "name", None),
        due_at=getattr(obj, "due_at", None),
        course_id=getattr(obj, "course_id", None),
        html_url=getattr(obj, "html_url", None),
    )


def list_courses(canvas: Canvas) -> list[Any]:
    """Fetch all courses for the authenticated user."""
    return list(canvas.get_courses())


def list_assignments(canvas: Canvas, course_id: int) -> list[Assignment]:
    """Fetch all assignments for one course.

    Raises:
        canvasapi.exceptions.CanvasException: When the request fails
    """
    course = canvas.get_course(course_id)
    return [to_assignment(a) for a in course.get_assignments()]


def fetch_assignments(canvas: Canvas, course_ids: list[int]) -> list[Assignment]:
    """Fetch assignments for several courses concurrently.

    Returns:
        Assignments for every course, flattened in course order
    """
    per_course = run_all(lambda cid: list_assignments(canvas, cid), course_ids)
    return [assignment for batch in per_course for assignment in batch]
