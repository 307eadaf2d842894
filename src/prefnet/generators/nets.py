# src/prefnet/generators/nets.py

"""
Random CP-nets: fresh ground-truth nets and random completions of learned ones.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..model.assignment import all_assignments
from ..model.specification import PreferenceSpecification

__all__ = ["random_specification", "random_completion"]

logger = logging.getLogger(__name__)


def random_specification(
    num_vars: int,
    in_degree_bound: int,
    rng: Optional[np.random.Generator] = None,
    *,
    names: Optional[Sequence[str]] = None,
) -> PreferenceSpecification:
    """
    Random complete acyclic CP-net.

    Variables are shuffled into a random order; each one draws between 0 and
    ``in_degree_bound`` parents from the variables before it and gets a random
    preferred value for every parent assignment. A parent whose draw turns out
    not to matter is dropped by table minimization, so realized in-degrees can
    be smaller than drawn ones.

    Parameters
    ----------
    num_vars : int
        Number of variables. Names default to ``x00, x01, ...``.
    in_degree_bound : int
        Maximum number of parents per variable.
    rng : numpy.random.Generator, optional
        Source of randomness.
    names : sequence of str, optional
        Explicit variable names (length must equal ``num_vars``).
    """
    if num_vars < 0:
        raise ValueError("num_vars must be >= 0")
    if in_degree_bound < 0:
        raise ValueError("in_degree_bound must be >= 0")
    gen = rng if rng is not None else np.random.default_rng()
    if names is None:
        width = max(2, len(str(max(num_vars - 1, 0))))
        names = [f"x{i:0{width}d}" for i in range(num_vars)]
    elif len(names) != num_vars:
        raise ValueError("len(names) must equal num_vars")

    spec = PreferenceSpecification(names)
    order: List[str] = [names[i] for i in gen.permutation(num_vars)]
    for pos, var in enumerate(order):
        earlier = order[:pos]
        k = int(gen.integers(min(in_degree_bound, len(earlier)) + 1))
        parents = sorted(gen.choice(earlier, size=k, replace=False).tolist()) if k else []
        for parent_assignment in all_assignments(parents):
            spec.add_preference(var, parent_assignment, bool(gen.integers(2)), preserve_acyclicity=False)
    logger.debug("generated random net over %d variables (in-degree <= %d)", num_vars, in_degree_bound)
    return spec


def random_completion(
    spec: PreferenceSpecification,
    rng: Optional[np.random.Generator] = None,
) -> PreferenceSpecification:
    """
    Copy of ``spec`` with every missing table entry filled at random.

    The input is left unchanged. Filling an entry can make a parent
    superfluous; the remaining gaps are looked up on the current table, so
    every parent assignment ends up with a preferred value.
    """
    gen = rng if rng is not None else np.random.default_rng()
    mod = spec.copy()
    filled = 0
    for var in mod.variables:
        for parent_assignment in all_assignments(mod.get_table(var).parents):
            if mod.get_table(var).preferred_value_given(parent_assignment) is None:
                if mod.add_preference(var, parent_assignment, bool(gen.integers(2)), preserve_acyclicity=False):
                    filled += 1
    logger.debug("random completion filled %d missing statement(s)", filled)
    return mod
