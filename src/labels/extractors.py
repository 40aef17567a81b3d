from typing import Any, Optional

from constraint_solvers.task_assigning.domain import DefaultLabels, TaskData, User

from .registry import LabelExtractor

SKILLS_INPUT = "skills"
AFFINITIES_INPUT = "affinities"


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _input_value(task: TaskData, input_name: str) -> Any:
    inputs = task.input_data if task is not None else None
    return inputs.get(input_name) if inputs else None


def _split_values(value: Any) -> Optional[set]:
    """Comma separated strings and plain iterables both give trimmed values."""
    if _is_empty(value):
        return None
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        items = [value]
    values = {
        item.strip() if isinstance(item, str) else item
        for item in items
        if not _is_empty(item)
    }
    return values or None


### TASK DATA ###
def extract_task_skills(task: TaskData) -> Optional[set]:
    return _split_values(_input_value(task, SKILLS_INPUT))


def extract_task_affinities(task: TaskData) -> Optional[set]:
    return _split_values(_input_value(task, AFFINITIES_INPUT))


def extract_task_skills_as_single_value(task: TaskData) -> Optional[set]:
    """
    Use the whole "skills" input as one label value.

    Shows how a deployment plugs in its own labeling strategy: registered
    with priority 5 it replaces the built-in SKILLS extractor (priority 0).
    """
    value = _input_value(task, SKILLS_INPUT)
    if _is_empty(value):
        return None
    return {value.strip() if isinstance(value, str) else value}


### USERS ###
def extract_user_skills(user: User) -> set:
    return set(user.skills) if user is not None else set()


DEFAULT_TASK_SKILLS_EXTRACTOR = LabelExtractor(
    data_type=TaskData,
    label_name=DefaultLabels.SKILLS.value,
    priority=0,
    function=extract_task_skills,
    name="DefaultTaskDataSkillsExtractor",
)

DEFAULT_TASK_AFFINITIES_EXTRACTOR = LabelExtractor(
    data_type=TaskData,
    label_name=DefaultLabels.AFFINITIES.value,
    priority=0,
    function=extract_task_affinities,
    name="DefaultTaskDataAffinitiesExtractor",
)

EXAMPLE_TASK_SKILLS_EXTRACTOR = LabelExtractor(
    data_type=TaskData,
    label_name=DefaultLabels.SKILLS.value,
    priority=5,
    function=extract_task_skills_as_single_value,
    name="TaskDataExampleValueExtractor",
)

DIRECTORY_USER_SKILLS_EXTRACTOR = LabelExtractor(
    data_type=User,
    label_name=DefaultLabels.SKILLS.value,
    priority=2,
    function=extract_user_skills,
    name="DBUserSystemSkillLabelValueExtractor",
)

DEFAULT_EXTRACTORS = (
    DEFAULT_TASK_SKILLS_EXTRACTOR,
    DEFAULT_TASK_AFFINITIES_EXTRACTOR,
    EXAMPLE_TASK_SKILLS_EXTRACTOR,
    DIRECTORY_USER_SKILLS_EXTRACTOR,
)
