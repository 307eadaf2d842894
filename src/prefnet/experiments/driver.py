# src/prefnet/experiments/driver.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import numpy as np
import pandas as pd
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from ..config import ExperimentConfig
from ..formats.xml_spec import load_specification
from ..generators.examples import sample_examples
from ..generators.nets import random_completion, random_specification
from ..learning.optimal_examples import learn
from ..model.outcomes import Comparison
from ..model.specification import PreferenceSpecification
from ..reporting import render_results

__all__ = [
    "RESULT_COLUMNS",
    "TrialNets",
    "set_overlap",
    "load_trial_nets",
    "run_trial",
    "run_experiments",
]

logger = logging.getLogger(__name__)
console = Console()

RESULT_COLUMNS = [
    "trial",                    # index of the ground-truth net
    "requestedExamples",        # examples drawn
    "numExamples",              # distinct examples among them
    "exampleDistribution",      # "uniform" or "biased"
    "numTrueEntailments",       # comparisons entailed by the ground-truth net
    "numLearnedEntailments",    # ... by the learned net (NaN if learning failed)
    "learnedOverlap",           # ... by both
    "numCompletedEntailments",  # ... by a random completion of the learned net
    "completedOverlap",         # ... by both ground truth and completion
    "numBaselineEntailments",   # ... by an unrelated random net
    "baselineOverlap",          # ... by both ground truth and baseline
    "learned",                  # whether learning succeeded
]


def set_overlap(first: Set[Any], second: Set[Any]) -> int:
    """Number of elements the two sets have in common."""
    return len(first & second)


@dataclass
class TrialNets:
    """Ground-truth and baseline nets of one trial."""
    trial: int
    truth: PreferenceSpecification
    baseline: PreferenceSpecification


def load_trial_nets(cfg: ExperimentConfig, trial: int, rng: np.random.Generator) -> TrialNets:
    """
    Nets for ``trial``: read from ``cfg.true_dir`` / ``cfg.baseline_dir`` when
    set, otherwise drawn with :func:`random_specification`.
    """
    fname = cfg.net_filename(trial)
    if cfg.true_dir is not None:
        truth = load_specification(Path(cfg.true_dir) / fname)
    else:
        truth = random_specification(cfg.num_vars, cfg.in_degree_bound, rng)
    if cfg.baseline_dir is not None:
        baseline = load_specification(Path(cfg.baseline_dir) / fname)
    else:
        baseline = random_specification(
            len(truth), cfg.in_degree_bound, rng, names=list(truth.variables)
        )
    return TrialNets(trial=trial, truth=truth, baseline=baseline)


def run_trial(
    nets: TrialNets,
    *,
    distribution: str,
    num_examples: int,
    cfg: ExperimentConfig,
    rng: np.random.Generator,
    true_entailments: Optional[Set[Comparison]] = None,
    baseline_entailments: Optional[Set[Comparison]] = None,
) -> Dict[str, Any]:
    """
    Sample examples from the ground truth, learn from them, and measure how
    many ground-truth entailments the learned, completed and baseline nets
    recover. Returns one result row (see :data:`RESULT_COLUMNS`).

    Precomputed entailment sets of the truth / baseline nets may be passed in
    to avoid recomputing them for every example count.
    """
    truth = nets.truth
    if true_entailments is None:
        true_entailments = truth.all_entailments(cfg.max_variables)
    if baseline_entailments is None:
        baseline_entailments = nets.baseline.all_entailments(cfg.max_variables)

    examples = sample_examples(
        truth, num_examples, distribution, prob=cfg.effective_bias, rng=rng
    )
    learned = learn(truth.variables, examples, cfg.in_degree_bound, config=cfg.learner)

    row: Dict[str, Any] = {
        "trial": nets.trial,
        "requestedExamples": num_examples,
        "numExamples": len(examples),
        "exampleDistribution": distribution,
        "numTrueEntailments": len(true_entailments),
        "numBaselineEntailments": len(baseline_entailments),
        "baselineOverlap": set_overlap(true_entailments, baseline_entailments),
        "learned": learned is not None,
    }
    if learned is None:
        logger.warning(
            "trial %d: no consistent net from %d %s examples",
            nets.trial, len(examples), distribution,
        )
        row.update({
            "numLearnedEntailments": np.nan,
            "learnedOverlap": np.nan,
            "numCompletedEntailments": np.nan,
            "completedOverlap": np.nan,
        })
        return row

    learned_entailments = learned.all_entailments(cfg.max_variables)
    completed = random_completion(learned, rng)
    completed_entailments = completed.all_entailments(cfg.max_variables)
    row.update({
        "numLearnedEntailments": len(learned_entailments),
        "learnedOverlap": set_overlap(true_entailments, learned_entailments),
        "numCompletedEntailments": len(completed_entailments),
        "completedOverlap": set_overlap(true_entailments, completed_entailments),
    })
    logger.debug(
        "trial %d: %s x%d -> %d/%d true entailments recovered",
        nets.trial, distribution, num_examples, row["learnedOverlap"], len(true_entailments),
    )
    return row


def _make_progress() -> Progress:
    columns = [SpinnerColumn(), TextColumn("[bold blue]{task.description}"), BarColumn(), TimeElapsedColumn()]
    return Progress(*columns, transient=False, console=console)


def run_experiments(
    config: Optional[ExperimentConfig] = None,
    *,
    output_csv: Optional[str] = None,
) -> pd.DataFrame:
    """
    Run every (trial, distribution, example count) combination.

    Parameters
    ----------
    config : ExperimentConfig, optional
        Experiment knobs; defaults to ``ExperimentConfig()``.
    output_csv : str, optional
        If given, the result table is also written there.

    Returns
    -------
    pd.DataFrame
        One row per combination with the columns of :data:`RESULT_COLUMNS`.
    """
    cfg = config or ExperimentConfig()
    rng = np.random.default_rng(cfg.seed)
    rows: List[Dict[str, Any]] = []
    per_trial = len(cfg.distributions) * len(cfg.example_counts)

    progress = _make_progress() if cfg.verbose else None
    task = None
    if progress is not None:
        progress.start()
        task = progress.add_task("Learning trials...", total=cfg.num_trials * per_trial)
    try:
        for trial in range(cfg.num_trials):
            nets = load_trial_nets(cfg, trial, rng)
            true_entailments = nets.truth.all_entailments(cfg.max_variables)
            baseline_entailments = nets.baseline.all_entailments(cfg.max_variables)
            for distribution in cfg.distributions:
                for n in cfg.example_counts:
                    rows.append(run_trial(
                        nets,
                        distribution=distribution,
                        num_examples=n,
                        cfg=cfg,
                        rng=rng,
                        true_entailments=true_entailments,
                        baseline_entailments=baseline_entailments,
                    ))
                    if progress is not None:
                        progress.advance(task)
            logger.info("trial %d complete (%d rows so far)", trial, len(rows))
    finally:
        if progress is not None:
            progress.stop()

    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    if output_csv is not None:
        out = Path(output_csv)
        out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out, index=False)
        logger.info("wrote %d rows to %s", len(df), out)

    if cfg.verbose:
        console.print(render_results(df))
    return df
