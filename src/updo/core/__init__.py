"""Functional core - pure document logic with no I/O."""

from .document import (
    Container,
    Document,
    Node,
    TaskListMarker,
    TaskState,
    Text,
    count_tasks,
    is_unfinished_task,
    walk,
)
from .sort import sort_tasks
from .rotate import InvalidTitleError, start_next_day
from .render import RenderError, Renderer, render, render_to

__all__ = [
    # Document
    "Container",
    "Document",
    "Node",
    "TaskListMarker",
    "TaskState",
    "Text",
    "count_tasks",
    "is_unfinished_task",
    "walk",
    # Sort
    "sort_tasks",
    # Rotate
    "InvalidTitleError",
    "start_next_day",
    # Render
    "RenderError",
    "Renderer",
    "render",
    "render_to",
]
