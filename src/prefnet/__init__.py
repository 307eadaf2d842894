"""
prefnet: binary conditional preference networks (CP-nets).

Model a net, ask it which outcomes dominate which, sample optimal examples
from it, and learn a net back from such examples.
"""

from .config import ExperimentConfig, LearnerConfig
from .errors import (
    CyclicNet,
    DuplicateVariable,
    FormatError,
    IllegalTableEdit,
    IncompleteNet,
    IncompleteQuery,
    InvalidAssignment,
    PreferenceError,
    StateSizeExceeded,
    UnboundVariable,
    UnknownVariable,
)
from .model import (
    Assignment,
    Comparison,
    CPTable,
    OptimalExample,
    PreferenceSpecification,
    all_assignments,
)
from .learning import learn
from .generators import optimum_given, random_specification, sample_examples
from .formats import load_specification, write_specification

__version__ = "0.1.0"

__all__ = [
    "Assignment",
    "Comparison",
    "CPTable",
    "OptimalExample",
    "PreferenceSpecification",
    "all_assignments",
    "learn",
    "optimum_given",
    "random_specification",
    "sample_examples",
    "load_specification",
    "write_specification",
    "ExperimentConfig",
    "LearnerConfig",
    "PreferenceError",
    "InvalidAssignment",
    "UnboundVariable",
    "UnknownVariable",
    "IncompleteQuery",
    "IllegalTableEdit",
    "DuplicateVariable",
    "IncompleteNet",
    "CyclicNet",
    "StateSizeExceeded",
    "FormatError",
]
