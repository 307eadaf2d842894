# src/prefnet/formats/examples_csv.py

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Set, Union

import pandas as pd

from ..errors import FormatError, InvalidAssignment
from ..model.assignment import Assignment
from ..model.outcomes import OptimalExample

__all__ = [
    "EXAMPLE_COLUMNS",
    "examples_to_frame",
    "examples_from_frame",
    "read_examples_csv",
    "write_examples_csv",
]

EXAMPLE_COLUMNS = ["condition", "optimum"]


def examples_to_frame(examples: Iterable[OptimalExample]) -> pd.DataFrame:
    """
    One row per example, ``condition`` and ``optimum`` in assignment text form.

    Rows are sorted so that equal example sets always give equal frames.
    """
    rows = sorted((str(ex.condition), str(ex.optimum)) for ex in examples)
    return pd.DataFrame(rows, columns=EXAMPLE_COLUMNS)


def examples_from_frame(df: pd.DataFrame) -> Set[OptimalExample]:
    """Inverse of :func:`examples_to_frame`; duplicate rows collapse."""
    missing = [c for c in EXAMPLE_COLUMNS if c not in df.columns]
    if missing:
        raise FormatError(f"example table is missing column(s) {missing}")
    out: List[OptimalExample] = []
    for i, (cond, opt) in enumerate(zip(df["condition"], df["optimum"])):
        # an empty condition cell comes back from CSV as NaN
        cond_text = "" if pd.isna(cond) else str(cond)
        opt_text = "" if pd.isna(opt) else str(opt)
        try:
            out.append(OptimalExample(Assignment.parse(cond_text), Assignment.parse(opt_text)))
        except InvalidAssignment as e:
            raise FormatError(f"row {i}: {e}") from e
    return set(out)


def read_examples_csv(path: Union[str, Path]) -> Set[OptimalExample]:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    return examples_from_frame(df)


def write_examples_csv(examples: Iterable[OptimalExample], path: Union[str, Path]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    examples_to_frame(examples).to_csv(p, index=False)
