from timefold.solver.domain import *
from timefold.solver.score import BendableScore
from typing import Annotated, Any, Iterable
from dataclasses import dataclass, field

from .domain import User

# Score levels of the example solution
HARD_LEVELS_SIZE = 2
SOFT_LEVELS_SIZE = 3


@planning_entity
@dataclass
class Task:
    id: Annotated[str, PlanningId]
    name: str = ""
    input_data: dict[str, Any] = field(default_factory=dict)
    # Label values computed by the extraction registry, e.g. {"SKILLS": {"java"}}
    labels: dict[str, frozenset] = field(default_factory=dict)
    user: Annotated[
        User | None, PlanningVariable(value_range_provider_refs=["userRange"])
    ] = None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "input_data": dict(self.input_data),
            "labels": {k: sorted(v) for k, v in self.labels.items()},
            "user": self.user.to_dict() if self.user else None,
        }

    @staticmethod
    def from_dict(d):
        return Task(
            id=d["id"],
            name=d.get("name", ""),
            input_data=dict(d.get("input_data") or {}),
            labels={k: frozenset(v) for k, v in (d.get("labels") or {}).items()},
            user=User.from_dict(d["user"]) if d.get("user") else None,
        )


@planning_solution
@dataclass
class ExampleSolution:
    user_list: Annotated[
        list[User],
        ProblemFactCollectionProperty,
        ValueRangeProvider(id="userRange"),
    ] = field(default_factory=list)
    task_list: Annotated[
        list[Task],
        PlanningEntityCollectionProperty,
        ValueRangeProvider(id="taskRange"),
    ] = field(default_factory=list)
    score: Annotated[
        BendableScore | None,
        PlanningScore(
            bendable_hard_levels_size=HARD_LEVELS_SIZE,
            bendable_soft_levels_size=SOFT_LEVELS_SIZE,
        ),
    ] = None

    def to_dict(self):
        return {
            "user_list": [u.to_dict() for u in self.user_list],
            "task_list": [t.to_dict() for t in self.task_list],
            "score": str(self.score) if self.score is not None else None,
        }

    @staticmethod
    def from_dict(d):
        return ExampleSolution(
            user_list=[User.from_dict(u) for u in d["user_list"]],
            task_list=[Task.from_dict(t) for t in d["task_list"]],
            # score is recomputed by the solver
        )


class ExampleSolutionFactory:
    """Creates empty ExampleSolution instances for the host's planner."""

    name = "ExampleSolutionFactory"

    def new_solution(self) -> ExampleSolution:
        return ExampleSolution()


def find_solution_factory(name: str, factories: Iterable) -> object | None:
    """Return the factory declaring the given name, or None."""
    return next((f for f in factories if f.name == name), None)
