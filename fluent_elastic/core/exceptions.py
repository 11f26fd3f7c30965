"""Core exceptions module for the fluent query builder.

This module contains custom exception classes raised while composing query and
aggregation fragments.
"""

from typing import List


class QueryBuilderError(Exception):
    """Base class for every error raised by the query builder."""


class MissingRequiredPartError(QueryBuilderError):
    """Exception raised when a builder is rendered before its mandatory parts were set.

    Attributes:
        owner (str): Label of the builder that failed to render
        missing (List[str]): Human-readable descriptions of the missing parts

    Notes:
        Raised by ExpressionComposer.render when has_required_parts() is False.
    """

    def __init__(self, owner: str, missing: List[str]):
        """Initialize MissingRequiredPartError with the failing builder details.

        Args:
            owner (str): Label of the builder that failed to render
            missing (List[str]): Descriptions of the parts that were not supplied
        """
        super().__init__(f"{owner} is missing required parts: {', '.join(missing)}")
        self.owner = owner
        self.missing = missing


class TooManyPartsError(QueryBuilderError):
    """Exception raised when a builder holds more parts than it can render.

    Attributes:
        owner (str): Label of the builder that failed to render
        limit (int): Maximum number of parts accepted
        count (int): Number of parts registered
    """

    def __init__(self, owner: str, limit: int, count: int):
        """Initialize TooManyPartsError."""
        super().__init__(f"{owner} accepts at most {limit} part(s), got {count}")
        self.owner = owner
        self.limit = limit
        self.count = count


class ComposerFrozenError(QueryBuilderError):
    """Exception raised when registering into a rendered composer while freeze_after_render is on."""

    def __init__(self, owner: str):
        """Initialize ComposerFrozenError."""
        super().__init__(f"{owner} was already rendered and does not accept new parts")
        self.owner = owner
