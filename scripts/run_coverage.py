#!/usr/bin/env python3
"""Measure xrand's test coverage in-process.

Runs the pytest suite under a coverage.Coverage collector configured from
pyproject.toml, then prints a terminal report and writes htmlcov/.

Usage:
    python scripts/run_coverage.py                   # terminal + HTML report
    python scripts/run_coverage.py --fail-under 90   # exit 2 below 90%
    python scripts/run_coverage.py --open            # open the HTML report
    python scripts/run_coverage.py -- -k sampler     # extra pytest arguments
"""

import argparse
import os
import sys
import webbrowser
from pathlib import Path

import coverage
import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--fail-under",
        type=float,
        default=0.0,
        help="exit with status 2 if total coverage is below this percent",
    )
    parser.add_argument(
        "--open", action="store_true", help="open the HTML report"
    )
    parser.add_argument(
        "pytest_args", nargs="*", help="arguments passed through to pytest"
    )
    args = parser.parse_args()

    os.chdir(ROOT_DIR)
    cov = coverage.Coverage(config_file="pyproject.toml")
    cov.start()
    status = pytest.main(["xrand/", *args.pytest_args])
    cov.stop()
    cov.save()
    if status != 0:
        return int(status)

    print("\n=== Coverage Report ===")
    total = cov.report(show_missing=True)
    html_dir = ROOT_DIR / "htmlcov"
    cov.html_report(directory=str(html_dir))
    print(f"HTML report: {html_dir / 'index.html'}")

    if args.open:
        webbrowser.open((html_dir / "index.html").as_uri())
    if total < args.fail_under:
        print(
            f"Coverage {total:.1f}% is below {args.fail_under:.1f}%",
            file=sys.stderr,
        )
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
