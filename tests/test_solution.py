import os
import shutil

import pytest

from tests.test_utils import get_test_logger

logger = get_test_logger(__name__)

# The Timefold solver runs on a JVM
if shutil.which("java") is None and "JAVA_HOME" not in os.environ:
    pytest.skip("Timefold requires a Java runtime", allow_module_level=True)

pytest.importorskip("timefold.solver")

from timefold.solver.domain import PlanningEntityCollectionProperty, ValueRangeProvider

from constraint_solvers.task_assigning.domain import Group, User
from constraint_solvers.task_assigning.solution import (
    ExampleSolution,
    ExampleSolutionFactory,
    Task,
    find_solution_factory,
)


def test_factory_creates_empty_solution():
    logger.start_test("Example solution factory creates an empty solution")

    factory = find_solution_factory("ExampleSolutionFactory", [ExampleSolutionFactory()])
    solution = factory.new_solution()

    assert isinstance(solution, ExampleSolution)
    assert solution.user_list == []
    assert solution.task_list == []
    assert solution.score is None

    logger.pass_test()


def test_tasks_are_a_value_range():
    metadata = ExampleSolution.__annotations__["task_list"].__metadata__

    assert PlanningEntityCollectionProperty in metadata
    assert sum(isinstance(m, ValueRangeProvider) for m in metadata) == 1


def test_unknown_factory_name():
    assert find_solution_factory("Other", [ExampleSolutionFactory()]) is None


def test_solution_to_dict():
    user = User("u1", frozenset({Group("IT")}), frozenset({"java"}))
    task = Task(
        id="1",
        name="review",
        input_data={"skills": "java"},
        labels={"SKILLS": frozenset({"java"})},
        user=user,
    )
    solution = ExampleSolution(user_list=[user], task_list=[task])

    d = solution.to_dict()

    assert d["task_list"][0]["labels"] == {"SKILLS": ["java"]}
    assert d["task_list"][0]["user"]["id"] == "u1"
    assert d["score"] is None

    restored = ExampleSolution.from_dict(d)
    assert restored.user_list == [user]
    assert restored.task_list[0].user == user
