"""Module for JSON value rendering helpers.

This module contains the functions every builder uses to turn Python values
into JSON text, so quoting is applied the same way across the library.
"""

from typing import Any, Dict

import orjson

SORT_DIRECTIONS = ("asc", "desc")


def json_value(value: Any) -> str:
    """Serialize a Python value to JSON text.

    Args:
        value (Any): A JSON-compatible value. Datetimes are rendered in RFC 3339 format.

    Returns:
        str: The JSON representation of `value`, using double quotes.
    """
    return orjson.dumps(value).decode("utf-8")


def json_key(name: Any) -> str:
    """Render `name` as a quoted JSON member name."""
    return json_value(str(name))


def json_member(key: Any, value: Any) -> str:
    """Render a single `"key": value` member."""
    return f"{json_key(key)}: {json_value(value)}"


def drop_none(**options: Any) -> Dict[str, Any]:
    """Return the keyword arguments that were actually supplied.

    Args:
        **options: Option values, where None means "not set".

    Returns:
        Dict[str, Any]: The options with None values removed, in call order.
    """
    return {key: value for key, value in options.items() if value is not None}


def check_range(name: str, value: float, min_value: float, max_value: float) -> float:
    """Ensure that an option value is within a valid range.

    Args:
        name (str): The option name, used in the error message.
        value (float): The value to validate.
        min_value (float): The minimum allowed value.
        max_value (float): The maximum allowed value.

    Returns:
        float: The validated value.

    Raises:
        ValueError: If the value is outside the valid range.
    """
    if value < min_value or value > max_value:
        raise ValueError(
            f"Invalid {name} value {value}. Must be between {min_value} and {max_value}"
        )
    return value


def check_direction(direction: str) -> str:
    """Ensure that a sort direction is 'asc' or 'desc'."""
    if direction not in SORT_DIRECTIONS:
        raise ValueError(
            f"Invalid sort direction '{direction}'. Must be one of {list(SORT_DIRECTIONS)}"
        )
    return direction
