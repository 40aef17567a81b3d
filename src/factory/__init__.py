"""
Factory module for presenting task assigning data.

This module contains the formatting logic turning directory users and
their labels into tabular form.
"""

from .data.formatters import users_to_dataframe, labels_to_dataframe

__all__ = [
    # Data formatters - convert domain objects to DataFrames
    "users_to_dataframe",
    "labels_to_dataframe",
]
