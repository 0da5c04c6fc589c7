"""
Data models for the task list (prd.json).

A TaskList wraps the parsed JSON document rather than replacing it: fields
this package does not know about (tech stack, Firebase id, extra story keys)
are carried through every rewrite untouched.
"""

from dataclasses import dataclass, field
from typing import Any

ITEMS_KEYS = ("userStories", "items")
ACCEPTANCE_KEYS = ("acceptance", "acceptanceCriteria")


@dataclass
class TaskItem:
    """One story: the unit of work of a loop iteration."""
    id: int
    title: str
    description: str = ""
    acceptance_criteria: list[str] = field(default_factory=list)
    passes: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "TaskItem":
        criteria = []
        for key in ACCEPTANCE_KEYS:
            if key in data:
                criteria = list(data[key])
                break
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            acceptance_criteria=criteria,
            passes=bool(data.get("passes", False)),
        )

    def to_dict(self, acceptance_key: str = "acceptance") -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            acceptance_key: list(self.acceptance_criteria),
            "passes": self.passes,
        }

    @property
    def criteria_text(self) -> str:
        """Acceptance criteria joined the way commit messages show them."""
        return "; ".join(self.acceptance_criteria)


class TaskList:
    """View over a prd.json document."""

    def __init__(self, document: dict):
        self.document = document
        self.items_key = next((k for k in ITEMS_KEYS if k in document), ITEMS_KEYS[0])
        self.document.setdefault(self.items_key, [])

    @property
    def title(self) -> str:
        return self.document.get("title") or "App"

    @property
    def overview(self) -> str:
        return self.document.get("overview") or ""

    @property
    def metadata(self) -> dict[str, Any]:
        """Everything besides title, overview and the story list."""
        skip = {"title", "overview", self.items_key}
        return {k: v for k, v in self.document.items() if k not in skip}

    @property
    def raw_items(self) -> list[dict]:
        return self.document[self.items_key]

    @property
    def items(self) -> list[TaskItem]:
        return [TaskItem.from_dict(raw) for raw in self.raw_items]

    @property
    def acceptance_key(self) -> str:
        """Key existing stories use for acceptance criteria."""
        for raw in self.raw_items:
            for key in ACCEPTANCE_KEYS:
                if key in raw:
                    return key
        return ACCEPTANCE_KEYS[0]

    @property
    def max_id(self) -> int:
        return max((raw["id"] for raw in self.raw_items), default=0)

    def get_item(self, item_id: int) -> TaskItem | None:
        for raw in self.raw_items:
            if raw["id"] == item_id:
                return TaskItem.from_dict(raw)
        return None

    def mark_passed(self, item_id: int) -> bool:
        """Set passes=true on exactly one story. Returns False if id is unknown."""
        for raw in self.raw_items:
            if raw["id"] == item_id:
                raw["passes"] = True
                return True
        return False

    def append(self, new_items: list[TaskItem]) -> list[TaskItem]:
        """Append stories with fresh ids after the current maximum.

        Incoming ids are ignored and passes is forced to False; ids already
        handed out are never reused.
        """
        next_id = self.max_id + 1
        key = self.acceptance_key
        appended = []
        for offset, item in enumerate(new_items):
            fresh = TaskItem(
                id=next_id + offset,
                title=item.title,
                description=item.description,
                acceptance_criteria=list(item.acceptance_criteria),
                passes=False,
            )
            self.raw_items.append(fresh.to_dict(key))
            appended.append(fresh)
        return appended
