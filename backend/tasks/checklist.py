"""
Checklist and progress rules.

Progress is the rounded percentage of completed checklist items and a
task's status follows from it:

    progress == 0        -> Pending
    0 < progress < 100   -> In Progress
    progress == 100      -> Completed

These helpers are pure so the service and the tests share one definition.
"""

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Iterable, List

from .exceptions import InvalidInput

PENDING = "Pending"
IN_PROGRESS = "In Progress"
COMPLETED = "Completed"


@dataclass(frozen=True)
class ChecklistItem:
    """One entry of a task's todo checklist."""
    text: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_checklist(raw: Any) -> List[ChecklistItem]:
    """
    Validate raw checklist data (as stored or as received) into items.

    Raises:
        InvalidInput: if the checklist is not a list of {text, completed}
    """
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise InvalidInput("todoChecklist must be an array of checklist items")

    items = []
    for position, entry in enumerate(raw):
        if isinstance(entry, ChecklistItem):
            items.append(entry)
            continue
        if not isinstance(entry, dict):
            raise InvalidInput(f"Checklist item {position} must be an object")

        text = entry.get('text')
        if not isinstance(text, str) or not text.strip():
            raise InvalidInput(f"Checklist item {position} needs a non-empty text")

        completed = entry.get('completed', False)
        if not isinstance(completed, bool):
            raise InvalidInput(f"Checklist item {position} completed flag must be a boolean")

        items.append(ChecklistItem(text=text.strip(), completed=completed))
    return items


def checklist_to_json(items: Iterable[ChecklistItem]) -> List[Dict[str, Any]]:
    return [item.to_dict() for item in items]


def completed_count(items: Iterable[ChecklistItem]) -> int:
    return sum(1 for item in items if item.completed)


def compute_progress(items: List[ChecklistItem]) -> int:
    """
    Percentage of completed items, rounded half up; 0 for an empty list.

    Integer arithmetic keeps 12.5 -> 13 (``round()`` would give 12).
    """
    total = len(items)
    if total == 0:
        return 0
    done = completed_count(items)
    return (200 * done + total) // (2 * total)


def derive_status(progress: int) -> str:
    if progress >= 100:
        return COMPLETED
    if progress > 0:
        return IN_PROGRESS
    return PENDING


def complete_all(items: Iterable[ChecklistItem]) -> List[ChecklistItem]:
    """Return the checklist with every item marked completed."""
    return [replace(item, completed=True) for item in items]
