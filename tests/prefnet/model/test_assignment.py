import pickle

import pytest

from prefnet.errors import InvalidAssignment, UnboundVariable
from prefnet.model import Assignment, all_assignments, iter_complete_assignments


def test_text_forms():
    a = Assignment(B=False, A=True)
    assert str(a) == "(A=T,B=F)"
    assert repr(a) == "Assignment(A=True, B=False)"
    assert str(Assignment()) == "()"


def test_parse_accepts_several_spellings():
    assert Assignment.parse("(A=T,B=F)") == Assignment(A=True, B=False)
    assert Assignment.parse(" A = 1 , B = no ") == Assignment(A=True, B=False)
    assert Assignment.parse("x=true") == Assignment(x=True)
    assert Assignment.parse("()") == Assignment()
    assert Assignment.parse("") == Assignment()


@pytest.mark.parametrize("text", ["A=maybe", "A=T,A=F", "A", "=T", "A=T=F"])
def test_parse_rejects_malformed(text):
    with pytest.raises(InvalidAssignment):
        Assignment.parse(text)


def test_values_must_be_bool_and_names_str():
    with pytest.raises(InvalidAssignment):
        Assignment(A=1)
    with pytest.raises(InvalidAssignment):
        Assignment({3: True})
    # also a ValueError for callers that don't know the hierarchy
    with pytest.raises(ValueError):
        Assignment(A="T")


def test_equality_and_hash_ignore_insertion_order():
    a = Assignment({"B": False, "A": True})
    b = Assignment(A=True, B=False)
    assert a == b
    assert hash(a) == hash(b)
    assert {a: 1}[b] == 1
    assert a != Assignment(A=True)


def test_mapping_protocol():
    a = Assignment(B=False, A=True)
    assert list(a) == ["A", "B"]
    assert dict(a) == {"A": True, "B": False}
    assert "A" in a and "C" not in a
    assert len(a) == 2
    assert a.variables == frozenset({"A", "B"})
    assert a.as_dict() == {"A": True, "B": False}


def test_subsumes():
    ab = Assignment(A=True, B=False)
    assert ab.subsumes(Assignment(A=True))
    assert ab.subsumes(Assignment())
    assert ab.subsumes(ab)
    assert not ab.subsumes(Assignment(A=False))
    assert not Assignment(A=True).subsumes(ab)
    assert not ab.subsumes(Assignment(C=True))


def test_altered_and_flipped():
    a = Assignment(A=True)
    assert a.altered("B", False) == Assignment(A=True, B=False)
    assert a.altered("A", False) == Assignment(A=False)
    assert a.flipped("A") == Assignment(A=False)
    # original untouched
    assert a == Assignment(A=True)


def test_flipping_an_unbound_variable_raises():
    with pytest.raises(UnboundVariable):
        Assignment(A=True).flipped("B")
    with pytest.raises(LookupError):
        Assignment().flipped("A")


def test_expanded_by_vars():
    base = Assignment(B=True)
    expanded = base.expanded_by_vars(["A", "C", "B"])
    assert len(expanded) == 4
    assert all(e.subsumes(base) for e in expanded)
    assert all(e.variables == {"A", "B", "C"} for e in expanded)
    assert base.expanded_by_vars(["B"]) == frozenset({base})
    assert base.expanded_by_vars([]) == frozenset({base})


def test_restriction_and_removal():
    a = Assignment(A=True, B=False, C=True)
    assert a.restricted_to(["A", "C", "Z"]) == Assignment(A=True, C=True)
    assert a.with_vars_removed(["A", "Z"]) == Assignment(B=False, C=True)
    assert a.restricted_to([]) == Assignment()


def test_binary_counter_order():
    a = Assignment(a=False, b=False)
    seen = []
    for _ in range(5):
        seen.append(str(a))
        a = a.next_lexicographically()
    assert seen == ["(a=F,b=F)", "(a=T,b=F)", "(a=F,b=T)", "(a=T,b=T)", "(a=F,b=F)"]
    assert Assignment(a=True, b=True).first_lexicographically() == Assignment(a=False, b=False)


def test_outcome_space_enumeration():
    lazy = list(all_assignments(["c", "a", "b"]))
    walked = list(iter_complete_assignments(["a", "b", "c"]))
    assert len(lazy) == 8
    assert len(set(lazy)) == 8
    assert lazy == walked
    assert lazy[0] == Assignment.uniform("abc", False)
    assert lazy[-1] == Assignment.uniform("abc", True)


def test_empty_outcome_space_has_one_outcome():
    assert list(all_assignments([])) == [Assignment()]
    assert list(iter_complete_assignments([])) == [Assignment()]


def test_pickle_round_trip():
    a = Assignment(A=True, B=False)
    assert pickle.loads(pickle.dumps(a)) == a
