"""Random nets and example sampling."""

from .examples import (
    biased_random_example,
    optimum_given,
    sample_examples,
    uniformly_random_example,
)
from .nets import random_completion, random_specification

__all__ = [
    "optimum_given",
    "uniformly_random_example",
    "biased_random_example",
    "sample_examples",
    "random_specification",
    "random_completion",
]
