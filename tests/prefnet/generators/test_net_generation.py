import logging

import networkx as nx
import numpy as np
import pytest

from prefnet.generators import random_completion, random_specification
from prefnet.model import Assignment, PreferenceSpecification


def test_random_net_shape():
    net = random_specification(6, 2, np.random.default_rng(5))
    assert net.variables == ("x00", "x01", "x02", "x03", "x04", "x05")
    assert net.is_complete()
    assert net.is_acyclic()
    assert nx.is_directed_acyclic_graph(net.parent_graph())
    assert all(len(t.parents) <= 2 for t in net.tables())


def test_random_net_is_reproducible():
    a = random_specification(5, 2, np.random.default_rng(9))
    b = random_specification(5, 2, np.random.default_rng(9))
    assert a == b


def test_random_net_names_and_zero_bound():
    net = random_specification(3, 0, np.random.default_rng(1), names=["a", "b", "c"])
    assert net.variables == ("a", "b", "c")
    assert all(t.parents == frozenset() for t in net.tables())
    assert net.is_complete()
    with pytest.raises(ValueError):
        random_specification(3, 1, names=["a"])


def test_random_completion_keeps_known_statements():
    net = PreferenceSpecification(["A", "B"])
    net.add_preference("A", Assignment(), True)
    net.add_preference("B", Assignment(A=True), True)

    done = random_completion(net, np.random.default_rng(2))
    assert done.is_complete()
    assert not net.is_complete()
    assert done.get_table("A") == net.get_table("A")
    assert done.get_table("B").preferred_value_given(Assignment(A=True)) is True


def test_completing_a_complete_net_changes_nothing(two_var_net):
    assert random_completion(two_var_net, np.random.default_rng(0)) == two_var_net


def test_random_completion_logs_number_of_filled_entries(caplog, two_var_net):
    caplog.set_level(logging.DEBUG, logger="prefnet.generators.nets")
    net = PreferenceSpecification(["A", "B"])
    net.add_preference("A", Assignment(), True)
    net.add_preference("B", Assignment(A=True), True)

    random_completion(net, np.random.default_rng(4))
    random_completion(two_var_net, np.random.default_rng(4))
    messages = [r.getMessage() for r in caplog.records if r.name == "prefnet.generators.nets"]
    assert messages == [
        "random completion filled 1 missing statement(s)",
        "random completion filled 0 missing statement(s)",
    ]
