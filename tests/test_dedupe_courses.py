import pytest

from Processing.dedupe_courses import dedupe_courses, has_meaningful_prereqs


WITHOUT = {"id": "X", "code": "CS200", "title": "no prereqs", "prerequisites": None}
WITH = {"id": "X", "code": "CS200", "title": "with prereqs",
        "prerequisites": {"type": "or", "courses": ["CS100", "CS101"]}}


@pytest.mark.parametrize("records", [[WITHOUT, WITH], [WITH, WITHOUT]])
def test_record_with_prerequisites_wins_regardless_of_order(records):
    unique, stats = dedupe_courses(records)
    assert unique == [WITH]
    assert (stats.original, stats.kept, stats.removed) == (2, 1, 1)


def test_ties_keep_first_seen():
    first = {"id": "1", "code": "A", "title": "first", "prerequisites": None}
    second = {"id": "1", "code": "A", "title": "second"}
    assert dedupe_courses([first, second])[0] == [first]

    first_or = {"id": "1", "code": "A", "title": "first", "prerequisites": {"type": "or", "courses": ["B", "C"]}}
    second_and = {"id": "1", "code": "A", "title": "second", "prerequisites": {"type": "and", "courses": ["D", "E"]}}
    assert dedupe_courses([first_or, second_and])[0] == [first_or]


def test_replacement_keeps_first_seen_slot():
    other = {"id": "2", "code": "B"}
    unique, _ = dedupe_courses([WITHOUT, other, WITH])
    assert unique == [WITH, other]


def test_identity_is_id_plus_code():
    a = {"id": "1", "code": "MATH135"}
    b = {"id": "2", "code": "MATH135"}
    unique, stats = dedupe_courses([a, b])
    assert unique == [a, b]
    assert stats.removed == 0


def test_simple_prerequisite_is_not_meaningful():
    assert not has_meaningful_prereqs({"type": "simple", "courses": ["A"]})
    assert not has_meaningful_prereqs({})
    assert not has_meaningful_prereqs(None)
    assert has_meaningful_prereqs({"type": "complex", "groups": []})
    assert has_meaningful_prereqs(["A"])
    assert not has_meaningful_prereqs([])
