# src/prefnet/learning/optimal_examples.py

"""
Structure learning of binary acyclic CP-nets from optimal examples.

An optimal example ``(condition, optimum)`` says that ``optimum`` is a best
outcome among those agreeing with ``condition``. For a variable ``V`` and a
candidate parent set ``P``, every example that leaves ``V`` free and agrees
with a parent assignment ``u`` of ``P`` is a vote for ``optimum[V]`` as the
preferred value of ``V`` given ``u``. ``P`` is consistent when no two votes
for the same ``u`` disagree.

The learner is greedy: it places variables one at a time, each with the first
consistent parent set (smallest first) it finds, and repeats rounds until a
round places nothing. It either explains every variable or fails as a whole.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from ..config import LearnerConfig
from ..model.assignment import Assignment, all_assignments
from ..model.cptable import CPTable
from ..model.outcomes import OptimalExample
from ..model.specification import PreferenceSpecification
from ..utils.subsets import bounded_subsets

__all__ = ["table_from_optima", "learn"]

logger = logging.getLogger(__name__)


def table_from_optima(
    var: str,
    parents: Iterable[str],
    examples: Iterable[OptimalExample],
    *,
    match_on: str = "optimum",
) -> Optional[CPTable]:
    """
    Build the table for ``var`` with parent set ``parents`` from the examples.

    Parameters
    ----------
    var : str
        Variable whose preferences are learned.
    parents : iterable of str
        Candidate parent set.
    examples : iterable of OptimalExample
        Training observations.
    match_on : {"optimum", "condition"}, default="optimum"
        Which side of an example has to agree with a parent assignment for the
        example to vote (see :class:`~prefnet.config.LearnerConfig`).

    Returns
    -------
    CPTable or None
        ``None`` when two examples vote differently for the same parent
        assignment. Otherwise the (possibly incomplete) table of every voted
        statement; parent assignments without votes are left out.

    Examples
    --------
    For a Side dish with candidate parents Entree and Wine, every optimum whose
    condition leaves Side free and that contains ``(Entree=Fish,Wine=Red)``
    must pick the same Side.
    """
    if match_on not in ("optimum", "condition"):
        raise ValueError("match_on must be 'optimum' or 'condition'")
    examples = list(examples)
    # Examples that fix var (or do not report it) carry no information about its preferred value.
    informative = [
        ex for ex in examples if var not in ex.condition and var in ex.optimum
    ]

    created = CPTable(var)
    for parent_assignment in all_assignments(parents):
        chosen: Optional[bool] = None
        for ex in informative:
            source: Assignment = ex.optimum if match_on == "optimum" else ex.condition
            if not source.subsumes(parent_assignment):
                continue
            vote = ex.optimum[var]
            if chosen is None:
                chosen = vote
            elif chosen is not vote:
                return None
        if chosen is not None:
            created = created.altered(parent_assignment, chosen)
    return created


def learn(
    variables: Iterable[str],
    examples: Iterable[OptimalExample],
    in_degree_bound: int,
    *,
    config: Optional[LearnerConfig] = None,
) -> Optional[PreferenceSpecification]:
    """
    Learn a binary acyclic CP-net consistent with every example.

    Parameters
    ----------
    variables : iterable of str
        Variables of the net to learn.
    examples : iterable of OptimalExample
        Training observations.
    in_degree_bound : int
        Maximum parent-set size.
    config : LearnerConfig, optional
        Candidate-pool and example-matching behaviour. Defaults to
        ``LearnerConfig()``.

    Returns
    -------
    PreferenceSpecification or None
        The learned net, or ``None`` if some variable has no consistent table
        with at most ``in_degree_bound`` parents (no partial nets are
        returned).
    """
    if in_degree_bound < 0:
        raise ValueError("in_degree_bound must be >= 0")
    cfg = config or LearnerConfig()
    all_vars: List[str] = sorted(set(variables))
    examples = list(examples)

    learned = PreferenceSpecification(all_vars)
    added: Set[str] = set()

    round_no = 0
    progress = True
    while progress:
        progress = False
        round_no += 1
        for var in all_vars:
            if var in added:
                continue
            if cfg.parent_pool == "added":
                pool = set(added)
            else:
                pool = set(all_vars) - {var}
            for candidate_parents in bounded_subsets(pool, in_degree_bound):
                table = table_from_optima(var, candidate_parents, examples, match_on=cfg.match_on)
                if table is None:
                    continue
                if not learned.set_table(var, table, preserve_acyclicity=True):
                    continue
                added.add(var)
                # var may now serve as a parent for a variable that could not be placed before
                progress = True
                logger.debug(
                    "round %d: placed %s with parents %s (%d statements)",
                    round_no, var, sorted(table.parents), len(table),
                )
                break

    if added == set(all_vars):
        logger.debug("learned a net over %d variables in %d rounds", len(all_vars), round_no)
        return learned

    missing = sorted(set(all_vars) - added)
    logger.debug(
        "no consistent net with in-degree <= %d; unplaced variables: %s",
        in_degree_bound, missing,
    )
    return None
