# src/prefnet/cli.py
"""
Command-line front end.

    prefnet random-net --vars 6 --bound 2 --seed 7 -o truth.xml
    prefnet sample truth.xml -n 40 --distribution biased --seed 7 -o examples.csv
    prefnet learn examples.csv --bound 2 -o learned.xml
    prefnet compare truth.xml learned.xml
    prefnet experiment --trials 10 --vars 6 --out experiments.csv --report run.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import nullcontext
from dataclasses import asdict
from typing import List, Optional, Sequence

import numpy as np
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import (
    DISTRIBUTIONS,
    MATCH_SOURCES,
    MAX_INDUCED_GRAPH_VARIABLES,
    PARENT_POOLS,
    ExperimentConfig,
    LearnerConfig,
)
from .errors import PreferenceError
from .experiments.driver import run_experiments, set_overlap
from .formats.examples_csv import read_examples_csv, write_examples_csv
from .formats.xml_spec import load_specification, write_specification
from .generators.examples import sample_examples
from .generators.nets import random_specification
from .learning.optimal_examples import learn
from .reporting import render_specification, tee_report

console = Console()
logger = logging.getLogger("prefnet")


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    handlers: List[logging.Handler] = [RichHandler(console=Console(stderr=True), show_path=False)]
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handlers.append(fh)
    logging.basicConfig(level=level.upper(), format="%(message)s", handlers=handlers, force=True)


def _int_list(text: str) -> tuple:
    try:
        return tuple(int(x) for x in text.split(",") if x.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {text!r}")


def _str_list(text: str) -> tuple:
    return tuple(x.strip() for x in text.split(",") if x.strip())


# ──────────────────────────────────────────────────────────────────────────────
# Commands
# ──────────────────────────────────────────────────────────────────────────────

def cmd_random_net(args: argparse.Namespace) -> int:
    rng = np.random.default_rng(args.seed)
    spec = random_specification(args.vars, args.bound, rng)
    write_specification(spec, args.output)
    console.print(f"[green]wrote[/green] net over {len(spec)} variables to {args.output}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    spec = load_specification(args.net)
    console.print(render_specification(spec, title=args.net))
    state = "acyclic" if spec.is_acyclic() else "CYCLIC"
    fill = "complete" if spec.is_complete() else "incomplete"
    console.print(f"{len(spec)} variables, {state}, {fill}")
    return 0


def cmd_sample(args: argparse.Namespace) -> int:
    spec = load_specification(args.net)
    rng = np.random.default_rng(args.seed)
    examples = sample_examples(spec, args.n, args.distribution, prob=args.prob, rng=rng)
    write_examples_csv(examples, args.output)
    console.print(f"[green]wrote[/green] {len(examples)} distinct examples to {args.output}")
    return 0


def cmd_learn(args: argparse.Namespace) -> int:
    examples = read_examples_csv(args.examples)
    if args.vars:
        variables = set(args.vars)
    else:
        variables = set()
        for ex in examples:
            variables |= ex.optimum.variables
    cfg = LearnerConfig(parent_pool=args.parent_pool, match_on=args.match_on)
    learned = learn(variables, examples, args.bound, config=cfg)
    if learned is None:
        console.print(
            f"[bold red]no consistent CP-net with in-degree ≤ {args.bound} "
            f"for {len(examples)} examples[/bold red]"
        )
        return 2
    console.print(render_specification(learned, title="learned"))
    if args.output:
        write_specification(learned, args.output)
        console.print(f"[green]wrote[/green] learned net to {args.output}")
    return 0


def cmd_entailments(args: argparse.Namespace) -> int:
    spec = load_specification(args.net)
    entailments = spec.all_entailments(args.max_variables)
    if args.list:
        for c in sorted(entailments, key=str):
            console.print(str(c), highlight=False)
    console.print(f"{len(entailments)} entailed comparisons over {2 ** len(spec)} outcomes")
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    truth = load_specification(args.truth)
    other = load_specification(args.other)
    a = truth.all_entailments(args.max_variables)
    b = other.all_entailments(args.max_variables)
    overlap = set_overlap(a, b)
    console.print(f"truth: {len(a)}  other: {len(b)}  overlap: {overlap}")
    contradicted = sum(1 for c in b if c.flipped() in a)
    console.print(f"comparisons of other that reverse truth: {contradicted}")
    return 0


def cmd_experiment(args: argparse.Namespace) -> int:
    cfg = ExperimentConfig(
        num_trials=args.trials,
        num_vars=args.vars,
        in_degree_bound=args.bound,
        example_counts=args.counts,
        distributions=args.distributions,
        bias_probability=args.prob,
        true_dir=args.true_dir,
        baseline_dir=args.baseline_dir,
        seed=args.seed,
        max_variables=args.max_variables,
        learner=LearnerConfig(parent_pool=args.parent_pool, match_on=args.match_on),
        verbose=not args.quiet,
    )
    if args.report:
        ctx = tee_report(args.report, title="prefnet experiments", settings=asdict(cfg))
    else:
        ctx = nullcontext()
    with ctx:
        run_experiments(cfg, output_csv=args.out)
    return 0


# ──────────────────────────────────────────────────────────────────────────────
# Parser
# ──────────────────────────────────────────────────────────────────────────────

def _add_learner_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--parent-pool", choices=PARENT_POOLS, default="added",
                   help="candidate parents: already-placed variables, or all others")
    p.add_argument("--match-on", choices=MATCH_SOURCES, default="optimum",
                   help="example side that must agree with a parent assignment")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prefnet", description="Learn and query binary CP-nets.")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    parser.add_argument("--log-file", default=None, help="also append log records to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("random-net", help="write a random complete acyclic net")
    p.add_argument("--vars", type=int, required=True)
    p.add_argument("--bound", type=int, default=2, help="in-degree bound")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("-o", "--output", required=True)
    p.set_defaults(func=cmd_random_net)

    p = sub.add_parser("show", help="print a net's tables")
    p.add_argument("net")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("sample", help="sample optimal examples from a net")
    p.add_argument("net")
    p.add_argument("-n", type=int, default=20)
    p.add_argument("--distribution", choices=DISTRIBUTIONS, default="uniform")
    p.add_argument("--prob", type=float, default=None, help="conditioning probability (biased)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("-o", "--output", required=True)
    p.set_defaults(func=cmd_sample)

    p = sub.add_parser("learn", help="learn a net from an example CSV")
    p.add_argument("examples")
    p.add_argument("--bound", type=int, default=2, help="in-degree bound")
    p.add_argument("--vars", type=_str_list, default=None,
                   help="comma-separated variables (default: those in the optima)")
    p.add_argument("-o", "--output", default=None)
    _add_learner_args(p)
    p.set_defaults(func=cmd_learn)

    p = sub.add_parser("entailments", help="count (or list) entailed comparisons")
    p.add_argument("net")
    p.add_argument("--list", action="store_true")
    p.add_argument("--max-variables", type=int, default=MAX_INDUCED_GRAPH_VARIABLES)
    p.set_defaults(func=cmd_entailments)

    p = sub.add_parser("compare", help="entailment overlap between two nets")
    p.add_argument("truth")
    p.add_argument("other")
    p.add_argument("--max-variables", type=int, default=MAX_INDUCED_GRAPH_VARIABLES)
    p.set_defaults(func=cmd_compare)

    p = sub.add_parser("experiment", help="run the learning experiment grid")
    p.add_argument("--trials", type=int, default=100)
    p.add_argument("--vars", type=int, default=10)
    p.add_argument("--bound", type=int, default=2)
    p.add_argument("--counts", type=_int_list, default=(5, 10, 20, 40, 80))
    p.add_argument("--distributions", type=_str_list, default=DISTRIBUTIONS)
    p.add_argument("--prob", type=float, default=None)
    p.add_argument("--true-dir", default=None)
    p.add_argument("--baseline-dir", default=None)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max-variables", type=int, default=MAX_INDUCED_GRAPH_VARIABLES)
    p.add_argument("--out", default="experiments.csv")
    p.add_argument("--report", default=None, help="mirror console output to this file")
    p.add_argument("--quiet", action="store_true")
    _add_learner_args(p)
    p.set_defaults(func=cmd_experiment)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    try:
        return args.func(args)
    except (PreferenceError, ValueError, OSError) as e:
        logger.debug("command failed", exc_info=True)
        console.print(f"[bold red]error:[/bold red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
