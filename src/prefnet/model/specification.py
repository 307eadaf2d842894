# src/prefnet/model/specification.py

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

import networkx as nx

from .assignment import Assignment, iter_complete_assignments
from .cptable import CPTable
from .outcomes import Comparison
from ..config import MAX_INDUCED_GRAPH_VARIABLES
from ..errors import DuplicateVariable, IllegalTableEdit, StateSizeExceeded, UnknownVariable

__all__ = ["PreferenceSpecification", "PreferenceGraph"]

logger = logging.getLogger(__name__)

PreferenceGraph = Dict[Assignment, FrozenSet[Assignment]]


class PreferenceSpecification:
    """
    CP-net over binary preference variables.

    Holds one :class:`CPTable` per variable plus the two display labels of
    every variable's domain (labels only matter for serialization; all logic
    uses ``True`` / ``False``).

    Tables are replaced wholesale on every edit, never mutated, which keeps
    rollback trivial: :meth:`add_preference` installs a candidate table, checks
    it, and puts the previous table back if the edit is rejected.

    Examples
    --------
    >>> net = PreferenceSpecification(["A", "B"])
    >>> net.add_preference("A", Assignment(), True)
    True
    >>> net.add_preference("B", Assignment(A=True), True)
    True
    >>> net.add_preference("B", Assignment(A=False), False)
    True
    >>> net.add_preference("A", Assignment(B=True), False)   # would close A -> B -> A
    False
    >>> len(net.all_entailments())
    6
    """

    def __init__(self, variables: Iterable[str] = ()) -> None:
        self._tables: Dict[str, CPTable] = {}
        self._value_names: Dict[str, Tuple[str, str]] = {}
        for var in variables:
            self.add_var(var)

    # ──────────────────────────────────────────────────────────────────
    # Variables & labels
    # ──────────────────────────────────────────────────────────────────
    def add_var(
        self,
        name: str,
        true_label: Optional[str] = None,
        false_label: Optional[str] = None,
    ) -> None:
        """
        Declare a variable with an empty table.

        Labels default to ``"<name>_T"`` / ``"<name>_F"``.
        """
        if name in self._tables:
            raise DuplicateVariable(f"variable {name!r} is already declared")
        t = true_label if true_label is not None else f"{name}_T"
        f = false_label if false_label is not None else f"{name}_F"
        if t == f:
            raise DuplicateVariable(f"variable {name!r} needs two distinct value labels, got {t!r} twice")
        self._tables[name] = CPTable(name)
        self._value_names[name] = (t, f)

    @property
    def variables(self) -> Tuple[str, ...]:
        return tuple(sorted(self._tables))

    def get_vars(self) -> FrozenSet[str]:
        return frozenset(self._tables)

    def __contains__(self, var: object) -> bool:
        return var in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def _require(self, var: str) -> None:
        if var not in self._tables:
            raise UnknownVariable(f"variable {var!r} is not declared")

    def value_names(self, var: str) -> Tuple[str, str]:
        """``(true_label, false_label)`` for ``var``."""
        self._require(var)
        return self._value_names[var]

    def label_for(self, var: str, value: bool) -> str:
        t, f = self.value_names(var)
        return t if value else f

    def value_for(self, var: str, label: str) -> bool:
        t, f = self.value_names(var)
        if label == t:
            return True
        if label == f:
            return False
        raise UnknownVariable(f"{label!r} is not a value of {var!r} (expected {t!r} or {f!r})")

    # ──────────────────────────────────────────────────────────────────
    # Tables
    # ──────────────────────────────────────────────────────────────────
    def get_table(self, var: str) -> CPTable:
        self._require(var)
        return self._tables[var]

    def tables(self) -> Iterator[CPTable]:
        return (self._tables[v] for v in self.variables)

    def set_table(self, var: str, table: CPTable, *, preserve_acyclicity: bool = False) -> bool:
        """
        Install ``table`` as the table of ``var``.

        Returns ``False`` (and keeps the previous table) when
        ``preserve_acyclicity`` is set and ``var`` would end up on a cycle.
        """
        self._require(var)
        if table.var != var:
            raise IllegalTableEdit(f"table for {table.var!r} cannot be installed for {var!r}")
        unknown = table.parents - self._tables.keys()
        if unknown:
            raise UnknownVariable(f"table for {var!r} conditions on undeclared variable(s) {sorted(unknown)}")

        previous = self._tables[var]
        self._tables[var] = table
        if preserve_acyclicity and self._part_of_cycle(var):
            self._tables[var] = previous
            logger.debug("rejected table for %s: parent relation would become cyclic", var)
            return False
        return True

    def add_preference(
        self,
        var: str,
        condition: Assignment,
        preferred_value: bool,
        preserve_acyclicity: bool = True,
    ) -> bool:
        """
        Try to add ``condition: var=preferred > var=not preferred``.

        Any statement with the same (expanded) condition is replaced. Returns
        whether the net changed: ``False`` if the edit would put ``var`` on a
        cycle of the parent relation (with ``preserve_acyclicity``) or if it
        is redundant with the existing table.
        """
        self._require(var)
        original = self._tables[var]
        candidate = original.altered(condition, preferred_value)
        return self._commit_if_changed(var, original, candidate, preserve_acyclicity)

    def flip_preference(
        self,
        var: str,
        assignment: Assignment,
        preserve_acyclicity: bool = True,
    ) -> bool:
        """Reverse the preference of ``var`` for ``assignment`` (see :meth:`CPTable.flipped`)."""
        self._require(var)
        original = self._tables[var]
        candidate = original.flipped(assignment)
        return self._commit_if_changed(var, original, candidate, preserve_acyclicity)

    def _commit_if_changed(
        self,
        var: str,
        original: CPTable,
        candidate: CPTable,
        preserve_acyclicity: bool,
    ) -> bool:
        unknown = candidate.parents - self._tables.keys()
        if unknown:
            raise UnknownVariable(f"condition for {var!r} uses undeclared variable(s) {sorted(unknown)}")

        self._tables[var] = candidate
        if preserve_acyclicity and self._part_of_cycle(var):
            self._tables[var] = original
            logger.debug("rejected edit of %s: parent relation would become cyclic", var)
            return False
        if candidate == original:
            self._tables[var] = original
            return False
        return True

    # ──────────────────────────────────────────────────────────────────
    # Parent relation
    # ──────────────────────────────────────────────────────────────────
    def _part_of_cycle(self, var: str) -> bool:
        """Breadth-first search over ancestors of ``var``; True iff ``var`` is among them."""
        explored: Set[str] = {var}
        frontier = deque([var])
        while frontier:
            current = frontier.popleft()
            for ancestor in self._tables[current].parents:
                if ancestor == var:
                    return True
                if ancestor not in explored:
                    explored.add(ancestor)
                    frontier.append(ancestor)
        return False

    def is_acyclic(self) -> bool:
        return not any(self._part_of_cycle(v) for v in self._tables)

    def is_complete(self) -> bool:
        return all(t.is_complete() for t in self._tables.values())

    def parent_graph(self) -> nx.DiGraph:
        """Directed graph with an edge ``parent -> child`` for every table."""
        g = nx.DiGraph()
        g.add_nodes_from(self.variables)
        for var, table in self._tables.items():
            g.add_edges_from((p, var) for p in table.parents)
        return g

    # ──────────────────────────────────────────────────────────────────
    # Dominance
    # ──────────────────────────────────────────────────────────────────
    def improving_flips(self, outcome: Assignment) -> FrozenSet[Assignment]:
        """
        Outcomes that differ from ``outcome`` in one variable and are better.

        Flipping ``V`` improves ``outcome`` iff ``V``'s table, read on the
        flipped outcome, prefers the flipped value.
        """
        better: Set[Assignment] = set()
        for var in self.variables:
            candidate = outcome.flipped(var)
            if self._tables[var].preferred_value_given(candidate) is candidate[var]:
                better.add(candidate)
        return frozenset(better)

    def _check_size(self, max_variables: Optional[int]) -> None:
        limit = MAX_INDUCED_GRAPH_VARIABLES if max_variables is None else max_variables
        if len(self._tables) >= limit:
            raise StateSizeExceeded(
                f"refusing to enumerate 2^{len(self._tables)} outcomes "
                f"(limit is fewer than {limit} variables)"
            )

    def induced_preference_graph(self, max_variables: Optional[int] = None) -> PreferenceGraph:
        """
        Adjacency lists of the induced preference graph (edges worse -> better).

        Every complete outcome is a node. The outcome space has ``2**n`` nodes,
        so this raises :class:`StateSizeExceeded` when the net has
        ``max_variables`` (default :data:`MAX_INDUCED_GRAPH_VARIABLES`) or more
        variables.
        """
        self._check_size(max_variables)
        graph: PreferenceGraph = {}
        for outcome in iter_complete_assignments(self._tables):
            graph[outcome] = self.improving_flips(outcome)
        return graph

    def all_entailments(self, max_variables: Optional[int] = None) -> Set[Comparison]:
        """
        Every comparison ``better > worse`` the net entails.

        This is the transitive closure of the induced preference graph: for
        each outcome, every distinct outcome reachable by improving flips is
        better than it.
        """
        graph = self.induced_preference_graph(max_variables)
        entailments: Set[Comparison] = set()
        for worse in graph:
            for better in _reachable(graph, worse):
                if better != worse:
                    entailments.add(Comparison(better, worse))
        return entailments

    def entails(self, better: Assignment, worse: Assignment) -> bool:
        """
        Whether ``better > worse`` follows from the net.

        Searches improving-flip sequences out of ``worse`` without building the
        whole induced graph.
        """
        if better.variables != set(self._tables) or worse.variables != set(self._tables):
            raise UnknownVariable("dominance queries need complete outcomes over the net's variables")
        if better == worse:
            return False
        explored: Set[Assignment] = {worse}
        stack: List[Assignment] = [worse]
        while stack:
            current = stack.pop()
            for nxt in self.improving_flips(current):
                if nxt == better:
                    return True
                if nxt not in explored:
                    explored.add(nxt)
                    stack.append(nxt)
        return False

    # ──────────────────────────────────────────────────────────────────
    # Copying, equality, printing
    # ──────────────────────────────────────────────────────────────────
    def copy(self) -> "PreferenceSpecification":
        mod = PreferenceSpecification()
        mod._tables = dict(self._tables)
        mod._value_names = dict(self._value_names)
        return mod

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreferenceSpecification):
            return NotImplemented
        return self._tables == other._tables

    __hash__ = None  # mutable container

    def __repr__(self) -> str:
        return f"PreferenceSpecification(variables={list(self.variables)})"

    def __str__(self) -> str:
        return "\n".join(str(t) for t in self.tables())


def _reachable(graph: PreferenceGraph, start: Assignment) -> Set[Assignment]:
    explored: Set[Assignment] = set()
    stack: List[Assignment] = [start]
    while stack:
        current = stack.pop()
        for better in graph[current]:
            if better not in explored:
                explored.add(better)
                stack.append(better)
    return explored
