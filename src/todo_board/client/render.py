from __future__ import annotations

from itertools import zip_longest
from typing import List

from ..models import TodoStatus
from .state import BoardState

COLUMN_TITLES = {
    TodoStatus.ACTIVE: "Active",
    TodoStatus.IN_PROGRESS: "In Progress",
    TodoStatus.DONE: "Done",
}

EMPTY_COLUMN = "No items yet"


def _cell(text: str, width: int) -> str:
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


# PUBLIC_INTERFACE
def render_board(state: BoardState, width: int = 28) -> str:
    """
    Render the three status columns side by side as plain text.

    Each header carries the column's item count; an empty column shows a
    placeholder line.
    """
    columns = state.columns()
    headers: List[str] = []
    bodies: List[List[str]] = []
    for status in TodoStatus:
        todos = columns[status]
        headers.append(f"{COLUMN_TITLES[status]} ({len(todos)})")
        bodies.append([f"#{t.id} {t.title}" for t in todos] or [EMPTY_COLUMN])

    lines = [" | ".join(_cell(h, width) for h in headers)]
    lines.append("-+-".join("-" * width for _ in headers))
    for row in zip_longest(*bodies, fillvalue=""):
        lines.append(" | ".join(_cell(c, width) for c in row).rstrip())
    return "\n".join(lines)
