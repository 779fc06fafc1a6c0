#!/usr/bin/env python3
"""Command-line front end for exercising the range sampler.

Usage:
    xrand                          # 10 values from [0, 5) with a summary
    xrand -n 2 -t 64 --bitstream   # a 64-bit bitstream
    xrand -s -n 7 -t 100000        # frequency distribution only
    xrand -u -s -n 7 -t 100000     # same, without debiasing
    xrand --test shuffle -n 8      # Fisher-Yates shuffles
    xrand --test list -b -3        # widths 1..11 starting at -3
    xrand --test skew -n 7 --bits 4 -t 100000
    xrand --coupon -n 10 -t 20 -l  # coupon collector trials
    xrand --ref -d                 # replay the bundled reference sample
"""

from __future__ import annotations

import argparse
import sys
import time

from .config import Mode, SamplerConfig, rejection_probability
from .drivers import (
    compare_skew,
    coupon_collector,
    format_counts,
    frequency,
    generate,
    shuffle,
    sweep,
)
from .errors import XrandError
from .reference import REFERENCE_SAMPLES
from .sampler import Sampler, create_sampler
from .sources import METHODS, make_source

TESTS = ("shuffle", "list", "skew")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xrand",
        description="Generate debiased random integers and report on them",
    )
    parser.add_argument(
        "-m",
        "--method",
        default="pcg",
        help=f"generator id ({', '.join(METHODS)})",
    )
    parser.add_argument(
        "-n", type=int, default=5, help="generate values from [base, base + n)"
    )
    parser.add_argument("-t", type=int, default=10, help="number of trials")
    parser.add_argument(
        "-b", type=int, default=0, help="set min value of the range to <base>"
    )
    parser.add_argument(
        "--seed", type=int, help="generator seed (default: current time in ms)"
    )
    parser.add_argument(
        "--bits",
        type=int,
        default=32,
        help="source resolution as a power of two (default: 32)",
    )
    parser.add_argument(
        "--bitstream", action="store_true", help="output a bitstream for -n 2"
    )
    parser.add_argument(
        "-s",
        "--stat",
        action="store_true",
        help="display frequency distribution of the generated values",
    )
    parser.add_argument(
        "--test", help=f"run a named test ({', '.join(TESTS)})"
    )
    parser.add_argument(
        "-u",
        "--unadjusted",
        action="store_true",
        help="disable the debiasing adjustment",
    )
    parser.add_argument(
        "--ref",
        action="store_true",
        help="use the bundled reference sample of raw values",
    )
    parser.add_argument(
        "--coupon", action="store_true", help="run coupon collector trials"
    )
    parser.add_argument(
        "-l", action="store_true", help="print coupon collector lengths"
    )
    parser.add_argument(
        "-i", action="store_true", help="display sampler statistics"
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="display verbose sampler statistics",
    )
    return parser


def make_sampler(args: argparse.Namespace) -> Sampler:
    source = make_source(args.method, args.seed)
    mode = Mode.ADJUSTED
    reference = None
    if args.unadjusted:
        mode = Mode.UNADJUSTED
    if args.ref:
        mode = Mode.REFERENCE
        reference = REFERENCE_SAMPLES
    return create_sampler(
        SamplerConfig(
            source=source,
            mode=mode,
            reference_data=reference,
            resolution=2**args.bits,
        )
    )


def _print_frequency(values, n, low):
    table = frequency(values, n, low)
    print(f"frequency: {format_counts(table.counts)}")
    print(f"min={table.min}, max={table.max}, range={table.spread}")


def _print_stats(sampler: Sampler, verbose: bool) -> None:
    print(f"stats: {sampler.snapshot().describe(verbose)}")


def cmd_stat(sampler, args):
    low = args.b
    values = [sampler.next(low, low + args.n) for _ in range(args.t)]
    _print_frequency(values, args.n, low)


def cmd_shuffle(sampler, args):
    items = list(range(args.n))
    print("### shuffle test ###")
    for _ in range(args.t):
        shuffle(sampler, items)
        print(items)


def cmd_list(sampler, args):
    for low, high, values in sweep(sampler, args.b, args.t):
        print(f"[{low}...{high}): {', '.join(str(v) for v in values)}")


def cmd_skew(sampler, args):
    result = compare_skew(
        args.n,
        args.t,
        seed=args.seed,
        resolution=sampler.resolution,
        source_factory=lambda seed: make_source(args.method, seed),
    )
    print(
        f"### skew test: n={result.n}, trials={result.trials}, "
        f"resolution=2**{args.bits} ###"
    )
    for label, table in (
        ("unadjusted", result.unadjusted),
        ("adjusted", result.adjusted),
    ):
        print(f"{label}: {format_counts(table.counts)}")
        print(
            f"  min={table.min}, max={table.max}, range={table.spread}, "
            f"chi2={table.chi_square:.2f}"
        )
    p = rejection_probability(result.n, result.resolution)
    print(f"adjusted rejects: {result.adjusted_rejects} (p={p:.3g} per draw)")


def cmd_coupon(sampler, args):
    n = args.n

    def report(draws):
        print(
            f"[0...{n}) complete at length {len(draws)}: "
            f"{', '.join(str(v) for v in draws)}"
        )

    summary = coupon_collector(
        sampler,
        n,
        args.t,
        seed=args.seed,
        source_factory=lambda seed: make_source(args.method, seed),
        report=report,
    )
    print()
    print(f"mean {summary.mean:.1f}, min {summary.min}, max {summary.max}")
    print(f"expected {summary.expected:.1f}")
    if args.l:
        print(f"length: {', '.join(str(v) for v in summary.lengths)}")
    print(f"len < expected: {summary.below_expected}")
    if args.i:
        _print_stats(sampler, verbose=False)


def cmd_generate(sampler, args):
    report = generate(
        sampler, args.b, args.n, args.t, bitstream=args.bitstream
    )
    print(f"[{report.low}...{report.high}): {report.text}")
    print()
    print(f"frequency: {format_counts(report.frequency.counts)}")
    print(
        f"min={report.frequency.min}, max={report.frequency.max}, "
        f"range={report.frequency.spread}"
    )
    c = report.compression
    print(
        f"compressed: {c.raw_bytes} -> {c.compressed_bytes} bytes, "
        f"deflated {c.deflated_percent:.2f}%"
    )
    if args.debug or args.i:
        _print_stats(sampler, verbose=args.debug)


TEST_COMMANDS = {
    "shuffle": cmd_shuffle,
    "list": cmd_list,
    "skew": cmd_skew,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.seed is None:
        args.seed = int(time.time() * 1000)
    print(f"options: {vars(args)}", file=sys.stderr)

    if args.test and args.test not in TEST_COMMANDS:
        print(f"Test {args.test} not found", file=sys.stderr)
        return 1

    try:
        sampler = make_sampler(args)
        if args.stat:
            cmd_stat(sampler, args)
        elif args.test:
            TEST_COMMANDS[args.test](sampler, args)
        elif args.coupon:
            cmd_coupon(sampler, args)
        else:
            cmd_generate(sampler, args)
    except (XrandError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
