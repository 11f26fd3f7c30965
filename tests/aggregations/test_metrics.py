"""Tests for the metric aggregation builders."""

import pytest

from fluent_elastic.aggregations import (
    AvgAggregation,
    CardinalityAggregation,
    ExtendedStatsAggregation,
    MaxAggregation,
    MinAggregation,
    PercentilesAggregation,
    StatsAggregation,
    SumAggregation,
    ValueCountAggregation,
)
from fluent_elastic.core.exceptions import MissingRequiredPartError
from fluent_elastic.core.format import fragment_to_dict

METRICS = [
    StatsAggregation,
    ExtendedStatsAggregation,
    MinAggregation,
    MaxAggregation,
    SumAggregation,
    AvgAggregation,
    ValueCountAggregation,
    PercentilesAggregation,
    CardinalityAggregation,
]


@pytest.mark.parametrize("aggregation_type", METRICS, ids=lambda cls: cls.kind)
def test_metric_renders_field(aggregation_type):
    rendered = aggregation_type().name("m").field("price").render()
    assert rendered == f'"m": {{ "{aggregation_type.kind}": {{ "field": "price" }} }}'


@pytest.mark.parametrize("aggregation_type", METRICS, ids=lambda cls: cls.kind)
def test_metric_requires_field_or_script(aggregation_type):
    with pytest.raises(MissingRequiredPartError) as excinfo:
        aggregation_type().name("m").render()
    assert excinfo.value.missing == ["field or script"]


def test_metric_with_script_and_params():
    aggregation = StatsAggregation().name("s").script(
        "doc['price'].value * params.rate", params={"rate": 2}
    )
    assert fragment_to_dict(aggregation.render()) == {
        "s": {
            "stats": {
                "script": {
                    "source": "doc['price'].value * params.rate",
                    "params": {"rate": 2},
                }
            }
        }
    }


def test_metric_missing_value():
    aggregation = AvgAggregation().name("a").field("grade").missing(10)
    assert aggregation.render() == '"a": { "avg": { "field": "grade","missing": 10 } }'


def test_metrics_do_not_accept_sub_aggregations():
    assert not hasattr(AvgAggregation(), "aggregations")


class TestPercentilesAggregation:
    """Tests for the percentiles aggregation."""

    def test_percents_accumulate(self):
        aggregation = (
            PercentilesAggregation()
            .name("load")
            .field("load_time")
            .percents(95, 99)
            .percents(99.9)
            .keyed(False)
        )
        assert fragment_to_dict(aggregation.render()) == {
            "load": {
                "percentiles": {
                    "field": "load_time",
                    "percents": [95, 99, 99.9],
                    "keyed": False,
                }
            }
        }

    @pytest.mark.parametrize("percent", [-1, 100.5])
    def test_percent_out_of_range(self, percent):
        aggregation = PercentilesAggregation().name("load").field("load_time")
        with pytest.raises(ValueError):
            aggregation.percents(50, percent)

        percentiles = fragment_to_dict(aggregation.render())["load"]["percentiles"]
        assert "percents" not in percentiles

    def test_compression(self):
        aggregation = PercentilesAggregation().name("p").field("x").compression(200)
        percentiles = fragment_to_dict(aggregation.render())["p"]["percentiles"]
        assert percentiles["tdigest"] == {"compression": 200}


def test_cardinality_precision_threshold():
    aggregation = (
        CardinalityAggregation().name("c").field("brand").precision_threshold(100)
    )
    assert aggregation.render() == (
        '"c": { "cardinality": { "field": "brand","precision_threshold": 100 } }'
    )


def test_cardinality_precision_threshold_out_of_range():
    with pytest.raises(ValueError, match="Must be between 0 and 40000"):
        CardinalityAggregation().precision_threshold(40001)


def test_extended_stats_sigma():
    aggregation = ExtendedStatsAggregation().name("e").field("price").sigma(3)
    assert fragment_to_dict(aggregation.render()) == {
        "e": {"extended_stats": {"field": "price", "sigma": 3}}
    }


def test_extended_stats_negative_sigma():
    with pytest.raises(ValueError):
        ExtendedStatsAggregation().sigma(-1)
