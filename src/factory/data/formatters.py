import pandas as pd

from constraint_solvers.task_assigning.domain import User


def users_to_dataframe(users: list[User]) -> pd.DataFrame:
    """
    Convert directory users to a pandas DataFrame.

    Args:
        users (list[User]): The users to convert, in directory order.

    Returns:
        pd.DataFrame: One row per user with sorted, comma separated groups and skills.
    """
    data: list[dict[str, str]] = [
        {
            "User": user.id,
            "Groups": ", ".join(sorted(user.group_ids)),
            "Skills": ", ".join(sorted(user.skills)),
        }
        for user in users
    ]
    return pd.DataFrame(data, columns=["User", "Groups", "Skills"])


def labels_to_dataframe(labels: dict[str, frozenset]) -> pd.DataFrame:
    """
    Convert extracted labels to a pandas DataFrame, one row per label value.

    Args:
        labels (dict[str, frozenset]): Label name to label values.

    Returns:
        pd.DataFrame: Rows sorted by label then value.
    """
    data = [
        {"Label": label, "Value": str(value)}
        for label in sorted(labels)
        for value in sorted(labels[label], key=str)
    ]
    return pd.DataFrame(data, columns=["Label", "Value"])
