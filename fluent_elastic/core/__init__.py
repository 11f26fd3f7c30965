"""Core of the fluent query builder.

The core package is organized as follows:
- composer.py: The expression composition engine every builder renders through
- config.py: Builder settings read from the environment
- exceptions.py: Errors raised while composing
- format.py: Pretty-printing and parsing of rendered text
- utilities.py: JSON value rendering helpers
"""

from .composer import BODY, Envelope, ExpressionComposer, Fragment, QueryPart
from .exceptions import (
    ComposerFrozenError,
    MissingRequiredPartError,
    QueryBuilderError,
    TooManyPartsError,
)

__all__ = [
    "BODY",
    "Envelope",
    "ExpressionComposer",
    "Fragment",
    "QueryPart",
    "ComposerFrozenError",
    "MissingRequiredPartError",
    "QueryBuilderError",
    "TooManyPartsError",
]
