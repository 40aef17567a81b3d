"""
Data module for formatting directory data.

This module converts users and extracted labels into pandas DataFrames
for display.
"""

from .formatters import users_to_dataframe, labels_to_dataframe

__all__ = [
    "users_to_dataframe",
    "labels_to_dataframe",
]
