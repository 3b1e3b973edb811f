import re

from factories.filter_factories import FieldFilterFactory, ObjectFilterFactory, TextFilterFactory

from aml_search.models import ObjectFilter, SearchOperator, SearchOptions, TextFilter
from aml_search.search.filters import parse_query
from aml_search.search.operators import (
    build_prefix_regex_for_field_type,
    build_prefix_regex_for_object_type,
    build_search_operators,
    search_operators_for_query,
)


def patterns(operators):
    return [op.options.prefix_regex.pattern if op.options.prefix_regex else None for op in operators]


def test_file_type_object_filter_restricts_file_type():
    ops = search_operators_for_query("type:model")
    assert ops == [SearchOperator(search_text="", options=SearchOptions(file_type="model"))]
    assert ops[0].options.prefix_regex is None


def test_owner_field_filter():
    (op,) = search_operators_for_query("owner:alice")
    assert op.search_text == "alice"
    assert op.options.prefix_regex.pattern == r"\sowner:\s+.*"
    assert op.options.file_type is None


def test_datasource_uses_data_source_name_prefix():
    (op,) = search_operators_for_query("datasource:warehouse")
    assert op.search_text == "warehouse"
    assert op.options.prefix_regex.pattern == r"\sdata_source_name:\s+.*"


def test_tag_field_prefix():
    (op,) = build_search_operators([FieldFilterFactory(field_type="tag", field_name="q1")])
    assert op.options.prefix_regex.pattern == r"\stag:\s+.*"


def test_property_object_consumes_following_text():
    filters = [
        ObjectFilterFactory(object_type="dimension"),
        TextFilterFactory(search_text="revenue"),
        ObjectFilterFactory(object_type="metric"),
    ]
    ops = build_search_operators(filters)
    assert len(ops) == 1
    assert ops[0].search_text == "revenue"
    assert patterns(ops) == [r"\sdimension\s+.*"]


def test_property_object_from_query():
    ops = search_operators_for_query("type:dimension revenue type:metric")
    assert [op.search_text for op in ops] == ["revenue"]
    assert patterns(ops) == [r"\sdimension\s+.*"]


def test_lone_property_object_is_discarded():
    assert search_operators_for_query("type:measure") == []


def test_property_object_followed_by_non_text_is_discarded():
    ops = search_operators_for_query("type:metric type:model")
    assert ops == [SearchOperator(search_text="", options=SearchOptions(file_type="model"))]


def test_property_object_does_not_consume_field_filter():
    ops = build_search_operators([ObjectFilterFactory(object_type="measure"), FieldFilterFactory(field_name="bob")])
    assert [op.search_text for op in ops] == ["bob"]
    assert patterns(ops) == [r"\sowner:\s+.*"]


def test_text_filter_has_no_prefix():
    (op,) = search_operators_for_query("total revenue")
    assert op == SearchOperator(search_text="total revenue", options=SearchOptions())


def test_other_object_filter_uses_object_name():
    (op,) = build_search_operators([ObjectFilter(object_type="widget", object_name="x")])
    assert op.search_text == "x"
    assert op.options.prefix_regex is None
    assert op.options.file_type is None


def test_base_options_are_inherited():
    base = SearchOptions(match_case=True, match_whole_word=True)
    filters = parse_query("hello type:model owner:alice type:metric revenue")
    ops = build_search_operators(filters, base)
    assert len(ops) == 4
    assert all(op.options.match_case and op.options.match_whole_word for op in ops)
    assert base.prefix_regex is None and base.file_type is None


def test_operators_in_query_order():
    ops = search_operators_for_query("hello type:model world owner:bob")
    assert [op.search_text for op in ops] == ["hello", "", "world", "bob"]
    assert [op.options.file_type for op in ops] == [None, "model", None, None]


def test_prefix_builders():
    assert build_prefix_regex_for_object_type("metric").pattern == r"\smetric\s+.*"
    assert build_prefix_regex_for_object_type("model") is None
    assert build_prefix_regex_for_field_type("owner").pattern == r"\sowner:\s+.*"
    assert build_prefix_regex_for_field_type("nope") is None


def test_prefix_regex_matches_qualifier_context():
    (op,) = search_operators_for_query("type:dimension order_id")
    assert op.options.prefix_regex.search("  dimension order_id {")
    assert not op.options.prefix_regex.search("measure order_id")
    (op,) = search_operators_for_query("datasource:pg")
    assert op.options.prefix_regex.search("  data_source_name: 'pg'")


def test_operator_serialization():
    (op,) = search_operators_for_query("owner:alice")
    dumped = op.model_dump(mode="json")
    assert dumped["search_text"] == "alice"
    assert dumped["options"]["prefix_regex"] == r"\sowner:\s+.*"
    data = op.to_search_data()
    assert data.search_text == "alice"
    assert isinstance(data.prefix_regex, re.Pattern)
