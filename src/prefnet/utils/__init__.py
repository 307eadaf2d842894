from .subsets import bounded_subsets, k_subsets

__all__ = ["bounded_subsets", "k_subsets"]
