from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DefaultLabels(str, Enum):
    """Label names the host computes out of the box."""

    SKILLS = "SKILLS"
    AFFINITIES = "AFFINITIES"


@dataclass(frozen=True)
class Group:
    id: str

    def to_dict(self):
        return {"id": self.id}

    @staticmethod
    def from_dict(d):
        return Group(id=d["id"])


@dataclass(frozen=True)
class User:
    id: str
    groups: frozenset[Group] = field(default_factory=frozenset)
    skills: frozenset[str] = field(default_factory=frozenset)
    # Free-form data, not part of the user's identity
    attributes: dict[str, Any] = field(
        default_factory=dict, compare=False, hash=False
    )

    def __post_init__(self):
        if not self.id:
            raise ValueError("User id must be a non-empty string")
        object.__setattr__(
            self, "groups", frozenset(g for g in self.groups if g.id)
        )
        object.__setattr__(self, "skills", frozenset(s for s in self.skills if s))

    @property
    def group_ids(self) -> frozenset[str]:
        return frozenset(g.id for g in self.groups)

    def to_dict(self):
        return {
            "id": self.id,
            "groups": sorted(self.group_ids),
            "skills": sorted(self.skills),
            "attributes": dict(self.attributes),
        }

    @staticmethod
    def from_dict(d):
        return User(
            id=d["id"],
            groups=frozenset(Group(g) for g in d.get("groups", [])),
            skills=frozenset(d.get("skills", [])),
            attributes=dict(d.get("attributes") or {}),
        )


@dataclass
class TaskData:
    """Task record as handed over by the host's process engine."""

    task_id: int
    name: str = ""
    input_data: dict[str, Any] | None = None

    def to_dict(self):
        return {
            "task_id": self.task_id,
            "name": self.name,
            "input_data": dict(self.input_data) if self.input_data is not None else None,
        }

    @staticmethod
    def from_dict(d):
        return TaskData(
            task_id=d["task_id"],
            name=d.get("name", ""),
            input_data=d.get("input_data"),
        )
