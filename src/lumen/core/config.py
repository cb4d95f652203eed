"""Readers for plain-data scene configuration entries.

Scene, material and light configs arrive as JSON-compatible dictionaries.
These helpers check the shape of each entry and raise ValueError with the
entry name, so a malformed config never surfaces as AttributeError or
TypeError deep inside the loaders.

Example:
    >>> from src.lumen.core.config import read_numbers
    >>> read_numbers([1, 2, 3], 3, "centre")
    (1.0, 2.0, 3.0)
"""

from typing import Any


def read_mapping(value: Any, name: str) -> dict[str, Any]:
    """Check that a config entry is a dictionary.

    Raises:
        ValueError: If value is not a dict.
    """
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object, got {value!r}")
    return value


def read_string(value: Any, name: str) -> str:
    """Check that a config entry is a string.

    Raises:
        ValueError: If value is not a str.
    """
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    return value


def read_number(value: Any, name: str) -> float:
    """Convert a numeric config entry to float.

    Raises:
        ValueError: If value is not an int or float.
    """
    # bool is an int subclass but never a meaningful quantity here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return float(value)


def read_numbers(value: Any, count: int, name: str) -> tuple[float, ...]:
    """Convert a list or tuple of exactly `count` numbers to a float tuple.

    Raises:
        ValueError: If value is not a list/tuple of `count` numbers.
    """
    if not isinstance(value, (list, tuple)) or len(value) != count:
        raise ValueError(f"{name} must be a list of {count} numbers, got {value!r}")
    return tuple(read_number(component, name) for component in value)
