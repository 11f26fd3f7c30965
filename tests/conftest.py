from typing import Callable, List

import pytest

from fluent_elastic.core.composer import QueryPart
from fluent_elastic.core.config import get_settings


class Literal(QueryPart):
    """A nested builder rendering a fixed piece of text."""

    def __init__(self, text: str = '"literal": null'):
        self.text = text

    def set(self, text: str) -> "Literal":
        self.text = text
        return self

    def render(self) -> str:
        return self.text


@pytest.fixture(autouse=True)
def reset_settings():
    """Re-read settings from the environment in every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def call_log() -> List[str]:
    return []


@pytest.fixture
def recording(call_log) -> Callable[[str], Callable]:
    """Build configuration callbacks that record when they run."""

    def make(label: str) -> Callable:
        def configure(part):
            call_log.append(label)
            return part.set(f'"{label}": true')

        return configure

    return make


@pytest.fixture
def literal_type():
    return Literal
