# src/prefnet/config.py

"""
Configuration objects for learning and experiments.

The learner knobs select between the two candidate-search behaviours that a
greedy optimal-example learner can reasonably have; the experiment knobs
control the trial loop that compares learned nets against ground truth.

Treat a config as an immutable snapshot passed into a run; avoid mutating it
mid-run.

Examples
--------
>>> from prefnet.config import LearnerConfig
>>> LearnerConfig().parent_pool
'added'
>>> LearnerConfig(match_on="condition").match_on
'condition'
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

__all__ = [
    "MAX_INDUCED_GRAPH_VARIABLES",
    "PARENT_POOLS",
    "MATCH_SOURCES",
    "DISTRIBUTIONS",
    "LearnerConfig",
    "ExperimentConfig",
]

# The induced preference graph has 2**n nodes; refuse to build it at or above this.
MAX_INDUCED_GRAPH_VARIABLES: int = 15

PARENT_POOLS: Tuple[str, ...] = ("added", "all")
MATCH_SOURCES: Tuple[str, ...] = ("optimum", "condition")
DISTRIBUTIONS: Tuple[str, ...] = ("uniform", "biased")


@dataclass(frozen=True)
class LearnerConfig:
    """
    Knobs for :func:`prefnet.learning.learn`.

    Parameters
    ----------
    parent_pool : {"added", "all"}, default="added"
        Where candidate parents come from.
        - ``"added"``: only variables already placed in the net. The parent
          relation is acyclic by construction.
        - ``"all"``: every other variable. Candidates that would close a cycle
          are rejected when installed, and the search moves on.
    match_on : {"optimum", "condition"}, default="optimum"
        Which side of an example must agree with a candidate parent assignment
        for the example to vote.
        - ``"optimum"``: the example's optimum (every observed co-occurrence
          counts).
        - ``"condition"``: the example's condition (only values asserted as
          given count).

    Notes
    -----
    The defaults reproduce a two-example net exactly (see the learner tests):
    with ``match_on="condition"`` an unconditioned example never votes for a
    parent assignment, so conditional tables are learned only from
    conditioned examples.
    """

    parent_pool: str = "added"
    match_on: str = "optimum"

    def __post_init__(self):
        if self.parent_pool not in PARENT_POOLS:
            raise ValueError(f"parent_pool must be one of {PARENT_POOLS}")
        if self.match_on not in MATCH_SOURCES:
            raise ValueError(f"match_on must be one of {MATCH_SOURCES}")


@dataclass
class ExperimentConfig:
    """
    Knobs for :func:`prefnet.experiments.run_experiments`.

    Parameters
    ----------
    num_trials : int, default=100
        Number of ground-truth nets to learn from.
    num_vars : int, default=10
        Variables per net.
    in_degree_bound : int, default=2
        Parent-set size bound used both for generating and for learning nets.
    example_counts : tuple[int, ...], default=(5, 10, 20, 40, 80)
        Example-set sizes tried for every trial and distribution.
    distributions : tuple[str, ...], default=("uniform", "biased")
        Example distributions (see :mod:`prefnet.generators.examples`).
    bias_probability : float, optional
        Probability that a variable is conditioned on in a biased example.
        Defaults to ``1 / num_vars``.
    true_dir, baseline_dir : str, optional
        Directories holding ``cpnet_n{n}c{k}d2_{trial:04d}.xml`` files for the
        ground-truth and baseline nets. When omitted, nets are generated at
        random from the seeded generator.
    seed : int, optional
        Seed for ``numpy.random.default_rng``.
    max_variables : int, default=MAX_INDUCED_GRAPH_VARIABLES
        Ceiling passed to the entailment computation.
    learner : LearnerConfig
        Learner behaviour.
    verbose : bool, default=True
        Show a progress bar and a summary table.
    """

    num_trials: int = 100
    num_vars: int = 10
    in_degree_bound: int = 2
    example_counts: Tuple[int, ...] = (5, 10, 20, 40, 80)
    distributions: Tuple[str, ...] = DISTRIBUTIONS
    bias_probability: Optional[float] = None
    true_dir: Optional[str] = None
    baseline_dir: Optional[str] = None
    seed: Optional[int] = None
    max_variables: int = MAX_INDUCED_GRAPH_VARIABLES
    learner: LearnerConfig = field(default_factory=LearnerConfig)
    verbose: bool = True

    def __post_init__(self):
        if self.num_trials < 0:
            raise ValueError("num_trials must be ≥ 0")
        if self.num_vars < 1:
            raise ValueError("num_vars must be ≥ 1")
        if self.in_degree_bound < 0:
            raise ValueError("in_degree_bound must be ≥ 0")
        if any(n < 0 for n in self.example_counts):
            raise ValueError("example_counts must be ≥ 0")
        for d in self.distributions:
            if d not in DISTRIBUTIONS:
                raise ValueError(f"unknown distribution {d!r}; expected one of {DISTRIBUTIONS}")
        if self.bias_probability is not None and not (0.0 <= self.bias_probability <= 1.0):
            raise ValueError("bias_probability must be in [0, 1]")

    @property
    def effective_bias(self) -> float:
        if self.bias_probability is not None:
            return self.bias_probability
        return 1.0 / self.num_vars

    def net_filename(self, trial: int) -> str:
        return f"cpnet_n{self.num_vars}c{self.in_degree_bound}d2_{trial:04d}.xml"
