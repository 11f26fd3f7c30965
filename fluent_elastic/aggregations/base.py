"""Base classes shared by the aggregation builders."""

from typing import Any, ClassVar, Dict, List, Optional, Tuple, TypeVar

import attr

from fluent_elastic.core.composer import (
    Configure,
    Envelope,
    ExpressionComposer,
    QueryPart,
)
from fluent_elastic.core.exceptions import MissingRequiredPartError
from fluent_elastic.core.utilities import drop_none

A = TypeVar("A", bound="Aggregation")


@attr.s
class Aggregation(QueryPart):
    """A named aggregation rendered as `"<name>": { "<kind>": { <options> } }`.

    Subclasses set `kind` to the JSON key of the aggregation and describe their
    mandatory options through `required_keys`. Options are registered with the
    composer in `_params`, so every aggregation kind renders through the same
    engine.
    """

    kind: ClassVar[str] = ""
    required_keys: ClassVar[Tuple[Tuple[str, ...], ...]] = ()
    brackets: ClassVar[Optional[str]] = "{}"

    _name: Optional[str] = attr.ib(default=None)
    _params: ExpressionComposer = attr.ib(init=False)
    _sub_aggregations: List[Configure] = attr.ib(factory=list, init=False)

    @_params.default
    def _make_params(self) -> ExpressionComposer:
        return ExpressionComposer(
            Envelope.keyed(
                self.kind, brackets=self.brackets, required_keys=self.required_keys
            ),
            owner=f"{self.kind} aggregation",
        )

    def name(self: A, value: str) -> A:
        """Set the name the aggregation result is reported under."""
        self._name = value
        return self

    def has_required_parts(self) -> bool:
        """Check whether the name and every mandatory option were set."""
        return bool(self._name) and self._params.has_required_parts()

    def render(self) -> str:
        """Render the aggregation, its options and its sub-aggregations.

        Raises:
            MissingRequiredPartError: If the name or a mandatory option was not set.
        """
        if not self._name:
            raise MissingRequiredPartError(f"{self.kind} aggregation", ["name"])

        body = ExpressionComposer(
            Envelope.keyed(self._name),
            owner=f"{self.kind} aggregation '{self._name}'",
        )
        body.register(self._params.render, key=self.kind)
        if self._sub_aggregations:
            body.register(self._render_sub_aggregations, key="aggregations")
        return body.render()

    def _render_sub_aggregations(self) -> str:
        from .aggregations import Aggregations

        aggregations = Aggregations()
        for configure in self._sub_aggregations:
            configured = configure(aggregations)
            if configured is not None:
                aggregations = configured
        return aggregations.render()


class BucketAggregation(Aggregation):
    """An aggregation producing buckets, which may hold sub-aggregations."""

    def aggregations(self: A, configure: Configure) -> A:
        """Register sub-aggregations computed for every bucket.

        Args:
            configure: Callback over an `Aggregations` builder. Several calls are
                applied to the same builder in call order when rendering.

        Raises:
            ComposerFrozenError: If the aggregation already rendered and
                freeze_after_render is set.
        """
        self._params.ensure_open()
        self._sub_aggregations.append(configure)
        return self


class ValuesSourceMixin:
    """Options for aggregations reading values from a field or a script."""

    _params: ExpressionComposer

    def field(self, name: str):
        """Read values from the field `name`."""
        self._params.register_part("field", name)
        return self

    def script(
        self,
        source: str,
        lang: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ):
        """Compute values with a script instead of reading a field."""
        self._params.register_part(
            "script", drop_none(source=source, lang=lang, params=params)
        )
        return self

    def missing(self, value: Any):
        """Value used for documents that have no value."""
        self._params.register_part("missing", value)
        return self


class MetricAggregation(ValuesSourceMixin, Aggregation):
    """A metric computed over the values of a field or a script."""

    required_keys = (("field", "script"),)
