"""Trial loop comparing learned nets against ground truth."""

from .driver import (
    RESULT_COLUMNS,
    TrialNets,
    load_trial_nets,
    run_experiments,
    run_trial,
    set_overlap,
)

__all__ = [
    "RESULT_COLUMNS",
    "TrialNets",
    "load_trial_nets",
    "run_experiments",
    "run_trial",
    "set_overlap",
]
