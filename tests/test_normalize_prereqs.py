import pytest

from Processing.catalog_models import ComplexPrereq, ListPrereq, SimplePrereq
from Processing.normalize_prereqs import clean_codes, normalize_prerequisites


def dump(prereq):
    return None if prereq is None else prereq.model_dump()


def test_simple_keeps_first_code_only():
    assert dump(normalize_prerequisites({"type": "simple", "courses": ["CS101", "CS102"]})) == {
        "type": "simple", "courses": ["CS101"]}


@pytest.mark.parametrize("raw", [
    {"type": "simple", "courses": []},
    {"type": "simple", "courses": [""]},
    {"type": "simple", "courses": [None, "CS101"]},
    {"type": "simple"},
    {"type": "or", "courses": ["", None]},
    {"type": "complex", "groups": []},
    {"type": "complex", "groups": [{"type": "or", "courses": []}]},
    {"type": "xor", "courses": ["A", "B"]},
    {"courses": ["A"]},
    None,
    "CS101",
    ["CS101"],
])
def test_malformed_or_empty_degrades_to_none(raw):
    assert normalize_prerequisites(raw) is None


def test_single_or_collapses_to_simple():
    assert dump(normalize_prerequisites({"type": "or", "courses": ["A"]})) == {"type": "simple", "courses": ["A"]}


def test_and_filters_blanks_and_keeps_tag():
    result = normalize_prerequisites({"type": "and", "courses": ["A", "", "  ", "B"]})
    assert isinstance(result, ListPrereq)
    assert dump(result) == {"type": "and", "courses": ["A", "B"]}


def test_complex_multi_code_group_is_not_flattened():
    raw = {"type": "complex", "groups": [{"type": "or", "courses": ["A", "B"]}]}
    assert dump(normalize_prerequisites(raw)) == raw


def test_complex_single_simple_group_flattens():
    raw = {"type": "complex", "groups": [{"type": "simple", "courses": ["A"]}]}
    assert dump(normalize_prerequisites(raw)) == {"type": "simple", "courses": ["A"]}


def test_complex_groups_are_retagged_and_empty_groups_dropped():
    raw = {"type": "complex", "groups": [
        {"type": "simple", "courses": ["A", "B"]},
        {"type": "or", "courses": [""]},
        {"type": "or", "courses": ["C"]},
        "junk",
    ]}
    result = normalize_prerequisites(raw)
    assert isinstance(result, ComplexPrereq)
    assert dump(result) == {"type": "complex", "groups": [
        {"type": "or", "courses": ["A", "B"]},
        {"type": "simple", "courses": ["C"]},
    ]}


def test_compound_entries_are_kept_verbatim():
    result = normalize_prerequisites({"type": "or", "courses": ["CS101", "CS102, CS103"]})
    assert result.courses == ["CS101", "CS102, CS103"]


@pytest.mark.parametrize("raw", [
    {"type": "simple", "courses": ["A", "B"]},
    {"type": "or", "courses": ["A", "", "B"]},
    {"type": "and", "courses": ["A"]},
    {"type": "complex", "groups": [{"type": "or", "courses": ["A", "B"]}, {"type": "or", "courses": ["C"]}]},
    {"type": "complex", "groups": [{"type": "simple", "courses": ["A"]}, {"type": "or", "courses": []}]},
])
def test_normalization_is_a_fixed_point(raw):
    once = normalize_prerequisites(raw)
    assert normalize_prerequisites(once) == once
    assert normalize_prerequisites(dump(once)) == once


@pytest.mark.parametrize("raw", [
    {"type": "or", "courses": ["A", "B", ""]},
    {"type": "complex", "groups": [{"type": "or", "courses": ["A", "B"]}, {"type": "simple", "courses": ["", "C"]}]},
    {"type": "simple", "courses": ["A"]},
])
def test_normalized_shapes_have_no_empty_lists(raw):
    result = normalize_prerequisites(raw)
    if isinstance(result, SimplePrereq):
        assert len(result.courses) == 1
    elif isinstance(result, ComplexPrereq):
        assert result.groups
        assert all(g.courses and all(g.courses) for g in result.groups)
    else:
        assert result.courses and all(result.courses)


def test_clean_codes_ignores_non_lists():
    assert clean_codes("CS101") == []
    assert clean_codes([" CS101 ", 0, True, {"x": 1}, 241]) == ["CS101", "0", "241"]
