# src/prefnet/reporting.py
from __future__ import annotations

import sys
import os
import io
import time
import datetime as _dt
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

import numpy as np
import pandas as pd
from rich import box
from rich.table import Table

from .model.specification import PreferenceSpecification


_RULE = "─" * 80
_STAMP = "%Y-%m-%d %H:%M:%S"


class _Mirror(io.TextIOBase):
    # console stream first, report file second; counts characters sent to the report
    def __init__(self, console_stream, report) -> None:
        self._console = console_stream
        self._report = report
        self.chars = 0

    def write(self, s: str) -> int:
        self._console.write(s)
        self._report.write(s)
        self.chars += len(s)
        return len(s)

    def flush(self) -> None:
        self._console.flush()
        self._report.flush()


@contextmanager
def tee_report(
    filepath: str,
    *,
    title: str = "prefnet run report",
    settings: Optional[Mapping[str, Any]] = None,
    include_stderr: bool = True,
) -> Iterator[None]:
    """
    Mirror everything printed inside the block into ``filepath`` (UTF-8).

    The report opens with a header (title, start time, library versions and
    the run's ``settings``, one ``key = value`` line each) and closes with a
    footer giving the finish time and elapsed wall-clock seconds. Console
    output is unchanged.

    Example
    -------
    >>> with tee_report("reports/run.txt", title="Learning trials",
    ...                 settings={"num_trials": 10}):
    ...     print("Hello")
    """
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
    f = open(filepath, "w", encoding="utf-8", newline="\n")

    lines = [
        _RULE, title, _RULE,
        f"Started: {_dt.datetime.now().strftime(_STAMP)}",
        f"Python: {sys.version.split()[0]}  numpy: {np.__version__}  pandas: {pd.__version__}",
    ]
    for key, value in (settings or {}).items():
        lines.append(f"  {key} = {value}")
    lines.append(_RULE)
    f.write("\n".join(lines) + "\n")
    f.flush()

    started = time.perf_counter()
    old_out, old_err = sys.stdout, sys.stderr
    mirror = None
    try:
        mirror = _Mirror(old_out, f)
        sys.stdout = mirror
        if include_stderr:
            sys.stderr = _Mirror(old_err, f)
        yield
    finally:
        sys.stdout.flush()
        if include_stderr:
            sys.stderr.flush()
        sys.stdout, sys.stderr = old_out, old_err

        chars = mirror.chars if mirror is not None else 0
        f.write(
            f"{_RULE}\nEND OF REPORT\n"
            f"Finished: {_dt.datetime.now().strftime(_STAMP)} "
            f"({time.perf_counter() - started:.1f}s, {chars} characters of output)\n{_RULE}\n"
        )
        f.close()


# ──────────────────────────────────────────────────────────────────────────────
# Rich renderings
# ──────────────────────────────────────────────────────────────────────────────

def render_specification(spec: PreferenceSpecification, *, title: Optional[str] = None) -> Table:
    """
    One row per CP-table statement: variable, condition, preference.

    Values are shown with the net's own labels, e.g. ``Entree=Fish`` and
    ``White ≻ Red``.
    """
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("variable", style="bold")
    table.add_column("parents")
    table.add_column("condition")
    table.add_column("preference")
    for cpt in spec.tables():
        parents = ", ".join(sorted(cpt.parents)) or "∅"
        if len(cpt) == 0:
            table.add_row(cpt.var, parents, "—", "[dim](no statements)[/dim]")
            continue
        for cond, preferred in cpt.items():
            cond_txt = ", ".join(f"{p}={spec.label_for(p, v)}" for p, v in cond.items()) or "⊤"
            better = spec.label_for(cpt.var, preferred)
            worse = spec.label_for(cpt.var, not preferred)
            table.add_row(cpt.var, parents, cond_txt, f"{better} ≻ {worse}")
    return table


def render_results(df: pd.DataFrame, *, title: Optional[str] = "entailment overlap") -> Table:
    """
    Mean overlap ratios per (distribution, example count) of an experiment table.

    Ratios are overlaps divided by the ground-truth entailment count; trials
    where learning failed are excluded from the learned column.
    """
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    for col in ("distribution", "examples", "trials", "learned", "learned∩true", "completed∩true", "baseline∩true"):
        table.add_column(col, justify="right")
    if df.empty:
        return table

    d = df.copy()
    denom = d["numTrueEntailments"].where(d["numTrueEntailments"] > 0)
    d["r_learned"] = d["learnedOverlap"] / denom
    d["r_completed"] = d["completedOverlap"] / denom
    d["r_baseline"] = d["baselineOverlap"] / denom
    grouped = d.groupby(["exampleDistribution", "requestedExamples"], sort=True)
    for (dist, n), g in grouped:
        table.add_row(
            str(dist),
            str(n),
            str(len(g)),
            f"{int(g['learned'].sum())}",
            _pct(g["r_learned"].mean()),
            _pct(g["r_completed"].mean()),
            _pct(g["r_baseline"].mean()),
        )
    return table


def _pct(x: float) -> str:
    if pd.isna(x):
        return "—"
    return f"{100.0 * x:5.1f}%"
