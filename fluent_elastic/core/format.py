"""Formatting functions for rendered query text."""

from typing import Any, Dict

import orjson


def beautify_json(text: str) -> str:
    """Re-indent a complete JSON document.

    Args:
        text: A rendered JSON document, e.g. the output of SearchBody.render

    Returns:
        str: The same document indented with two spaces
    """
    return orjson.dumps(orjson.loads(text), option=orjson.OPT_INDENT_2).decode("utf-8")


def fragment_to_dict(fragment: str) -> Dict[str, Any]:
    """Parse a rendered member fragment such as `"aggregations": { ... }`.

    Args:
        fragment: One or more comma-separated JSON members

    Returns:
        Dict[str, Any]: The members as a dictionary
    """
    return orjson.loads("{" + fragment + "}")
