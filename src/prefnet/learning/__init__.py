"""Learning CP-nets from optimal examples."""

from .optimal_examples import learn, table_from_optima

__all__ = ["learn", "table_from_optima"]
