"""
Core CP-net model: assignments, conditional preference tables, examples,
comparisons and the preference specification that ties them together.
"""

from .assignment import Assignment, all_assignments, iter_complete_assignments
from .cptable import CPTable
from .outcomes import Comparison, OptimalExample
from .specification import PreferenceGraph, PreferenceSpecification

__all__ = [
    "Assignment",
    "all_assignments",
    "iter_complete_assignments",
    "CPTable",
    "Comparison",
    "OptimalExample",
    "PreferenceGraph",
    "PreferenceSpecification",
]
