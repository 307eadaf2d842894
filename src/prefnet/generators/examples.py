# src/prefnet/generators/examples.py

"""
Sampling optimal examples from a known CP-net.

Every sampler takes an explicit ``numpy.random.Generator`` so experiments are
reproducible; pass ``rng=None`` to get a fresh, unseeded generator.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

import numpy as np

from ..errors import CyclicNet, IncompleteNet
from ..model.assignment import Assignment
from ..model.outcomes import OptimalExample
from ..model.specification import PreferenceSpecification

__all__ = [
    "optimum_given",
    "uniformly_random_example",
    "biased_random_example",
    "sample_examples",
]

logger = logging.getLogger(__name__)


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def optimum_given(spec: PreferenceSpecification, condition: Assignment) -> OptimalExample:
    """
    The best outcome agreeing with ``condition``, as an :class:`OptimalExample`.

    Values are propagated down the parent relation: a free variable is set to
    its preferred value as soon as all of its parents are set. Requires a
    complete acyclic net; raises :class:`IncompleteNet` when a table has no
    preferred value for a parent assignment that came up, and
    :class:`CyclicNet` when propagation stalls.
    """
    optimum: Dict[str, bool] = dict(condition)
    remaining: Set[str] = set(spec.variables) - set(optimum)
    while remaining:
        placed_before = len(remaining)
        for var in sorted(remaining):
            table = spec.get_table(var)
            if not table.parents <= optimum.keys():
                continue
            preferred = table.preferred_value_given(Assignment(optimum))
            if preferred is None:
                raise IncompleteNet(
                    f"table for {var!r} has no preference given "
                    f"{Assignment(optimum).restricted_to(table.parents)}; complete net expected"
                )
            optimum[var] = preferred
        remaining -= optimum.keys()
        if len(remaining) == placed_before:
            raise CyclicNet(
                f"cannot place {sorted(remaining)}: parent relation must be acyclic"
            )
    return OptimalExample(condition, Assignment(optimum))


def uniformly_random_example(
    spec: PreferenceSpecification,
    rng: Optional[np.random.Generator] = None,
) -> OptimalExample:
    """
    Condition each variable to true, false, or nothing with equal probability,
    then return the optimum given that condition.
    """
    gen = _rng(rng)
    condition: Dict[str, bool] = {}
    for var in spec.variables:
        choice = int(gen.integers(3))
        if choice == 0:
            condition[var] = True
        elif choice == 1:
            condition[var] = False
        # choice == 2: leave var unconditioned
    return optimum_given(spec, Assignment(condition))


def biased_random_example(
    spec: PreferenceSpecification,
    prob: float,
    rng: Optional[np.random.Generator] = None,
) -> OptimalExample:
    """
    Condition each variable with probability ``prob`` (value from a fair coin),
    then return the optimum given that condition.
    """
    if not 0.0 <= prob <= 1.0:
        raise ValueError("prob must be in [0, 1]")
    gen = _rng(rng)
    condition: Dict[str, bool] = {}
    for var in spec.variables:
        if gen.random() < prob:
            condition[var] = bool(gen.integers(2))
    return optimum_given(spec, Assignment(condition))


def sample_examples(
    spec: PreferenceSpecification,
    n: int,
    distribution: str = "uniform",
    *,
    prob: Optional[float] = None,
    rng: Optional[np.random.Generator] = None,
) -> Set[OptimalExample]:
    """
    Draw ``n`` examples and return the distinct ones.

    ``distribution`` is ``"uniform"`` or ``"biased"``; the biased sampler uses
    ``prob`` (default ``1 / len(spec)``).
    """
    gen = _rng(rng)
    out: List[OptimalExample] = []
    if distribution == "uniform":
        for _ in range(n):
            out.append(uniformly_random_example(spec, gen))
    elif distribution == "biased":
        p = prob if prob is not None else 1.0 / max(len(spec), 1)
        for _ in range(n):
            out.append(biased_random_example(spec, p, gen))
    else:
        raise ValueError("distribution must be 'uniform' or 'biased'")
    distinct = set(out)
    logger.debug("sampled %d %s examples (%d distinct)", n, distribution, len(distinct))
    return distinct
