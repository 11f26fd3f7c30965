"""Tests for the query clause builders."""

from datetime import datetime

import pytest

from fluent_elastic.core.exceptions import MissingRequiredPartError, TooManyPartsError
from fluent_elastic.queries import BoolQuery, QueryClause


@pytest.mark.parametrize(
    "configure,expected",
    [
        (lambda q: q.term("status", "published"), '{ "term": {"status":"published"} }'),
        (lambda q: q.terms("tags", ("a", "b")), '{ "terms": {"tags":["a","b"]} }'),
        (lambda q: q.match("title", "quick fox"), '{ "match": {"title":"quick fox"} }'),
        (
            lambda q: q.match("title", "quick fox", operator="and"),
            '{ "match": {"title":{"query":"quick fox","operator":"and"}} }',
        ),
        (lambda q: q.match_all(), '{ "match_all": {} }'),
        (lambda q: q.exists("price"), '{ "exists": {"field":"price"} }'),
        (lambda q: q.prefix("sku", "AB-"), '{ "prefix": {"sku":"AB-"} }'),
    ],
    ids=["term", "terms", "match", "match_operator", "match_all", "exists", "prefix"],
)
def test_leaf_clauses(configure, expected):
    assert configure(QueryClause()).render() == expected


def test_range_leaves_out_unset_bounds():
    clause = QueryClause().range(
        "date", gte=datetime(2024, 1, 1), lt=datetime(2024, 2, 1)
    )
    assert clause.render() == (
        '{ "range": {"date":{"gte":"2024-01-01T00:00:00","lt":"2024-02-01T00:00:00"}} }'
    )


def test_empty_clause_is_rejected():
    with pytest.raises(MissingRequiredPartError, match="query clause"):
        QueryClause().render()


def test_two_clause_types_are_rejected():
    clause = QueryClause().term("a", 1).exists("b")
    with pytest.raises(TooManyPartsError):
        clause.render()


def test_same_clause_type_twice_replaces():
    clause = QueryClause().term("a", 1).term("b", 2)
    assert clause.render() == '{ "term": {"b":2} }'


def test_second_bool_replaces_first():
    clause = (
        QueryClause()
        .bool(lambda b: b.must(lambda q: q.term("a", 1)))
        .bool(lambda b: b.must_not(lambda q: q.exists("b")))
    )
    assert clause.render() == (
        '{ "bool": { "must_not": [ { "exists": {"field":"b"} } ] } }'
    )


class TestBoolQuery:
    """Tests for the bool compound clause."""

    def test_occurrences_accumulate_in_call_order(self):
        clause = QueryClause().bool(
            lambda b: b.must(lambda q: q.term("a", 1), lambda q: q.exists("b"))
            .must(lambda q: q.match_all())
            .must_not(lambda q: q.term("c", 2))
        )
        assert clause.render() == (
            '{ "bool": { "must": [ { "term": {"a":1} },{ "exists": {"field":"b"} },'
            '{ "match_all": {} } ],"must_not": [ { "term": {"c":2} } ] } }'
        )

    def test_should_with_minimum_should_match(self):
        query = (
            BoolQuery()
            .should(lambda q: q.term("color", "red"), lambda q: q.term("color", "blue"))
            .minimum_should_match(1)
        )
        assert query.render() == (
            '"bool": { "should": [ { "term": {"color":"red"} },'
            '{ "term": {"color":"blue"} } ],"minimum_should_match": 1 }'
        )

    def test_nested_bool(self):
        clause = QueryClause().bool(
            lambda b: b.filter(
                lambda q: q.bool(lambda inner: inner.should(lambda s: s.exists("x")))
            )
        )
        assert clause.render() == (
            '{ "bool": { "filter": [ { "bool": { "should": [ { "exists": {"field":"x"} } ] } } ] } }'
        )

    def test_empty_bool_is_rejected(self):
        with pytest.raises(MissingRequiredPartError, match="bool query"):
            BoolQuery().render()

    def test_occurrence_without_clauses_is_rejected(self):
        with pytest.raises(MissingRequiredPartError, match="bool must"):
            BoolQuery().must().render()

    def test_clause_callbacks_are_deferred(self):
        calls = []

        def configure(clause):
            calls.append("clause")
            return clause.match_all()

        query = BoolQuery().filter(configure)
        assert calls == []
        query.render()
        assert calls == ["clause"]
