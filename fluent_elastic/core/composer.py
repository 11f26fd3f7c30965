"""Expression composition engine shared by every fluent builder.

Builders never assemble JSON by hand. They register fragments with an
ExpressionComposer and let it join and wrap them at render time:

1. register_expression stores a configuration callback over a nested builder
2. register_part stores a leaf `"key": value` member
3. render checks the required parts, builds every fragment in registration
   order, joins the texts with the envelope separator and wraps the result

The composer is parameterized by an Envelope, so every builder kind shares this
one implementation and differs only in its envelope data.
"""

import abc
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

import attr

from fluent_elastic.core.config import get_settings
from fluent_elastic.core.exceptions import (
    ComposerFrozenError,
    MissingRequiredPartError,
    TooManyPartsError,
)
from fluent_elastic.core.utilities import json_key, json_member

logger = logging.getLogger(__name__)

BODY = "{body}"

BRACKETS: Dict[Optional[str], Tuple[str, str]] = {
    "{}": ("{ ", " }"),
    "[]": ("[ ", " ]"),
    None: ("", ""),
}


class QueryPart(abc.ABC):
    """Defines the contract shared by every nested builder.

    A query part can be created without arguments and renders itself to a
    self-contained JSON fragment.
    """

    @abc.abstractmethod
    def render(self) -> str:
        """Render the part to JSON text.

        Returns:
            str: The JSON fragment for this part.
        """
        ...


P = TypeVar("P", bound=QueryPart)

Configure = Callable[[P], Optional[P]]


def _as_groups(value: Iterable[Iterable[str]]) -> Tuple[Tuple[str, ...], ...]:
    return tuple(tuple(group) for group in value)


@attr.s(frozen=True)
class Envelope:
    """The fixed wrapper placed around the joined fragment text.

    Attributes:
        head (str): Text emitted before the joined fragments.
        tail (str): Text emitted after the joined fragments.
        separator (str): Text placed between two fragments.
        min_parts (int): Minimum number of fragments required to render.
        max_parts (Optional[int]): Maximum number of fragments accepted, None for no limit.
        required_keys (Tuple[Tuple[str, ...], ...]): Groups of fragment keys. Each group is
            satisfied when at least one of its keys was registered.
    """

    head: str = attr.ib()
    tail: str = attr.ib()
    separator: str = attr.ib(default=",")
    min_parts: int = attr.ib(default=0)
    max_parts: Optional[int] = attr.ib(default=None)
    required_keys: Tuple[Tuple[str, ...], ...] = attr.ib(
        default=(), converter=_as_groups
    )

    @classmethod
    def parse(cls, template: str, **kwargs: Any) -> "Envelope":
        """Build an envelope from a template holding a single `{body}` placeholder.

        Args:
            template (str): The envelope text, e.g. `{ {body} }`.
            **kwargs: Remaining Envelope attributes.

        Returns:
            Envelope: The envelope split around the placeholder.

        Raises:
            ValueError: If the template does not contain exactly one placeholder.
        """
        if template.count(BODY) != 1:
            raise ValueError(
                f"Envelope template must contain exactly one {BODY} placeholder, got {template!r}"
            )
        head, _, tail = template.partition(BODY)
        return cls(head=head, tail=tail, **kwargs)

    @classmethod
    def keyed(
        cls, key: str, brackets: Optional[str] = "{}", **kwargs: Any
    ) -> "Envelope":
        """Build an envelope rendering `"key": { <body> }`.

        Args:
            key (str): The member name, quoted on output.
            brackets (Optional[str]): "{}" for an object, "[]" for an array or None
                to emit the body as the bare member value.
            **kwargs: Remaining Envelope attributes.

        Returns:
            Envelope: The member envelope.
        """
        opening, closing = BRACKETS[brackets]
        return cls(head=f"{json_key(key)}: {opening}", tail=closing, **kwargs)

    @property
    def template(self) -> str:
        """Return the envelope as a template string."""
        return f"{self.head}{BODY}{self.tail}"

    def wrap(self, body: str) -> str:
        """Substitute the joined fragment text into the envelope."""
        return f"{self.head}{body}{self.tail}"


@attr.s(frozen=True)
class Fragment:
    """A deferred computation producing the JSON text of one registered part.

    A fragment that builds None contributes nothing to the joined body.
    """

    build: Callable[[], Optional[str]] = attr.ib()
    key: Optional[str] = attr.ib(default=None)


def _freeze_after_render() -> bool:
    return get_settings().freeze_after_render


@attr.s
class ExpressionComposer:
    """Accumulates fragments and renders them inside an envelope.

    Fragments render in registration order. Rendering is idempotent: two renders
    with no registration in between return the same text. Registering after a
    render is allowed unless freeze_after_render is set, in which case it raises
    ComposerFrozenError.
    """

    envelope: Envelope = attr.ib()
    owner: str = attr.ib(default="expression")
    freeze_after_render: bool = attr.ib(factory=_freeze_after_render)
    _fragments: List[Fragment] = attr.ib(factory=list, init=False)
    _rendered: bool = attr.ib(default=False, init=False)

    def __len__(self) -> int:
        """Return the number of registered fragments."""
        return len(self._fragments)

    @property
    def keys(self) -> List[str]:
        """Return the keys of the registered fragments in registration order."""
        return [
            fragment.key for fragment in self._fragments if fragment.key is not None
        ]

    def ensure_open(self) -> None:
        """Check that the composer still accepts parts.

        Raises:
            ComposerFrozenError: If the composer already rendered and
                freeze_after_render is set.
        """
        if self._rendered:
            if self.freeze_after_render:
                raise ComposerFrozenError(self.owner)
            logger.debug(f"Registering into {self.owner} after it was rendered")

    def register(
        self,
        build: Callable[[], Optional[str]],
        key: Optional[str] = None,
        replace: bool = False,
    ) -> "ExpressionComposer":
        """Store a deferred fragment.

        Args:
            build (Callable[[], Optional[str]]): Called at render time to produce the fragment text.
            key (Optional[str]): The member this fragment contributes, used by required-key checks.
            replace (bool): Replace an earlier fragment with the same key, keeping its position.

        Returns:
            ExpressionComposer: The composer, for chaining.

        Raises:
            ComposerFrozenError: If the composer already rendered and freeze_after_render is set.
        """
        self.ensure_open()

        fragment = Fragment(build=build, key=key)
        if replace and key is not None:
            for index, existing in enumerate(self._fragments):
                if existing.key == key:
                    self._fragments[index] = fragment
                    return self

        self._fragments.append(fragment)
        return self

    def discard(self, key: str) -> "ExpressionComposer":
        """Remove every fragment registered under `key`."""
        self.ensure_open()
        self._fragments = [
            fragment for fragment in self._fragments if fragment.key != key
        ]
        return self

    def register_part(self, key: str, value: Any) -> "ExpressionComposer":
        """Store a leaf `"key": value` member, replacing an earlier one with the same key.

        The value is serialized at render time, so later mutations of a list or
        dict value are reflected in the output.
        """
        return self.register(lambda: json_member(key, value), key=key, replace=True)

    def register_expression(
        self,
        part_type: Callable[[], P],
        configure: Configure,
        key: Optional[str] = None,
        replace: bool = False,
    ) -> "ExpressionComposer":
        """Store a configuration callback over a nested builder.

        The callback is not called here. At render time a fresh `part_type()` is
        passed to it and the builder it returns is rendered. A callback returning
        None is taken to have configured the builder it was given. Errors raised
        by the callback propagate to the caller of render.

        Args:
            part_type (Callable[[], P]): Factory for the empty nested builder.
            configure (Configure): Transformation from the empty builder to a configured one.
            key (Optional[str]): The member this fragment contributes.
            replace (bool): Replace an earlier fragment with the same key.

        Returns:
            ExpressionComposer: The composer, for chaining.
        """

        def build() -> str:
            part = part_type()
            configured = configure(part)
            return (part if configured is None else configured).render()

        return self.register(build, key=key, replace=replace)

    def missing_parts(self) -> List[str]:
        """Describe the required parts that were not registered."""
        missing = []
        if len(self._fragments) < self.envelope.min_parts:
            missing.append(f"at least {self.envelope.min_parts} part(s)")

        keys = set(self.keys)
        for group in self.envelope.required_keys:
            if not keys.intersection(group):
                missing.append(" or ".join(group))
        return missing

    def has_required_parts(self) -> bool:
        """Check whether every mandatory part was registered."""
        return not self.missing_parts()

    def render(self) -> str:
        """Build every fragment, join them and wrap them in the envelope.

        Returns:
            str: The rendered JSON text.

        Raises:
            MissingRequiredPartError: If a mandatory part was not registered.
            TooManyPartsError: If more fragments were registered than the envelope accepts.
        """
        missing = self.missing_parts()
        if missing:
            raise MissingRequiredPartError(self.owner, missing)

        max_parts = self.envelope.max_parts
        if max_parts is not None and len(self._fragments) > max_parts:
            raise TooManyPartsError(self.owner, max_parts, len(self._fragments))

        texts = [fragment.build() for fragment in self._fragments]
        body = self.envelope.separator.join(text for text in texts if text is not None)
        self._rendered = True
        logger.debug(f"Rendered {self.owner} from {len(texts)} fragment(s)")
        return self.envelope.wrap(body)
