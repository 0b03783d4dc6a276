"""Command line entry point: fixed pytest invocations for the e2e suite."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import webbrowser
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from storefront_e2e.utils import configure_logging, get_logger, load_settings, verify_path_exists
from storefront_e2e.utils.config import Settings

logger = get_logger("runner")

E2E_DIR = "tests/e2e"
MODES = ("test", "headed", "file", "debug")

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"

USAGE_ERROR = 4  # pytest's exit code for bad invocations


@dataclass(frozen=True)
class TestCommand:
    """Concrete pytest invocation for one CLI mode."""

    __test__ = False

    kind: str
    cmd: list[str]
    env: dict[str, str] = field(default_factory=dict)
    report_file: str = "N/A"
    junit_file: str = "N/A"


@dataclass
class RunSummary:
    """Per-scenario outcomes of one run, read back from JUnit XML."""

    outcomes: dict[str, str] = field(default_factory=dict)

    def count(self, outcome: str) -> int:
        return sum(1 for value in self.outcomes.values() if value == outcome)

    @property
    def passed(self) -> int:
        return self.count(PASSED)

    @property
    def failed(self) -> int:
        return self.count(FAILED)

    @property
    def skipped(self) -> int:
        return self.count(SKIPPED)

    @property
    def ok(self) -> bool:
        return self.failed == 0


def build_command(mode: str, settings: Settings, test_path: str = "") -> TestCommand:
    """Map a CLI mode onto the pytest flags it stands for."""
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}; expected one of {MODES}")
    if mode == "file" and not test_path:
        raise ValueError("The 'file' mode needs a test file path")

    artifacts = settings.artifacts_dir
    report_file = settings.html_report
    junit_file = settings.junit_report
    target = test_path or E2E_DIR

    cmd = [
        sys.executable,
        "-m",
        "pytest",
        target,
        "--e2e",
        "-m",
        "e2e",
        "-v",
        "--tb=short",
        f"--html={report_file}",
        "--self-contained-html",
        f"--junitxml={junit_file}",
    ]
    env = {"STOREFRONT_ARTIFACTS_DIR": str(artifacts)}

    if mode == "debug":
        env.update({"PWDEBUG": "1", "STOREFRONT_HEADLESS": "false"})
        cmd += ["-x", "-s", "-n", "0", "--reruns", "0"]
    elif mode == "headed":
        env["STOREFRONT_HEADLESS"] = "false"
        cmd += ["-n", "0", "--reruns", str(settings.retries)]
    else:
        cmd += ["-n", settings.workers, "--reruns", str(settings.retries)]

    return TestCommand(
        kind=mode,
        cmd=cmd,
        env=env,
        report_file=str(report_file),
        junit_file=str(junit_file),
    )


def _run_command(command: TestCommand) -> int:
    env = {**os.environ, **command.env}
    logger.info("Executing %s command: %s", command.kind, " ".join(command.cmd))
    completed = subprocess.run(command.cmd, env=env, check=False)
    return completed.returncode


def summarize_junit(path: str | Path) -> RunSummary:
    """Read scenario outcomes from a pytest JUnit XML file."""
    tree = ET.parse(path)
    summary = RunSummary()
    for case in tree.getroot().iter("testcase"):
        name = f"{case.get('classname', '')}::{case.get('name', '')}".strip(":")
        if case.find("failure") is not None or case.find("error") is not None:
            outcome = FAILED
        elif case.find("skipped") is not None:
            outcome = SKIPPED
        else:
            outcome = PASSED
        summary.outcomes[name] = outcome
    return summary


def diff_outcomes(first: RunSummary, second: RunSummary) -> dict[str, tuple[str, str]]:
    """Scenarios whose outcome differs between two runs.

    A scenario missing from one run is reported with outcome ``"missing"``.
    """
    changed: dict[str, tuple[str, str]] = {}
    for name in sorted(set(first.outcomes) | set(second.outcomes)):
        a = first.outcomes.get(name, "missing")
        b = second.outcomes.get(name, "missing")
        if a != b:
            changed[name] = (a, b)
    return changed


def open_report(path: str | Path) -> bool:
    """Open the HTML report in the default browser."""
    report = Path(path)
    if not report.exists():
        logger.error("No report at %s; run the suite first", report)
        return False
    logger.info("Opening %s", report)
    return webbrowser.open(report.resolve().as_uri())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront-e2e",
        description="Run the storefront end-to-end suite.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("test", help="Run every e2e scenario in parallel workers")
    sub.add_parser("headed", help="Run every e2e scenario with a visible browser")

    file_cmd = sub.add_parser("file", help="Run a single test file")
    file_cmd.add_argument("path")

    debug_cmd = sub.add_parser("debug", help="Run under the Playwright inspector")
    debug_cmd.add_argument("path", nargs="?", default="")

    sub.add_parser("report", help="Open the last HTML report")

    summary_cmd = sub.add_parser("summary", help="Print scenario outcomes from a JUnit file")
    summary_cmd.add_argument("junit", nargs="?", default="")

    compare_cmd = sub.add_parser("compare", help="Compare scenario outcomes of two runs")
    compare_cmd.add_argument("first")
    compare_cmd.add_argument("second")
    return parser


def _read_summaries(*paths: str | Path) -> list[RunSummary] | None:
    """Summarize each JUnit file, or log and return None if one is unreadable."""
    try:
        return [summarize_junit(path) for path in paths]
    except (OSError, ET.ParseError) as exc:
        logger.error("Could not read JUnit report: %s", exc)
        return None


def _print_summary(summary: RunSummary) -> None:
    for name, outcome in sorted(summary.outcomes.items()):
        print(f"{outcome.upper():8} {name}")
    print(f"\n{summary.passed} passed, {summary.failed} failed, {summary.skipped} skipped")


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level, serialize=settings.log_json)

    if args.command == "report":
        return 0 if open_report(settings.html_report) else 1

    if args.command == "summary":
        summaries = _read_summaries(args.junit or settings.junit_report)
        if summaries is None:
            return USAGE_ERROR
        _print_summary(summaries[0])
        return 0 if summaries[0].ok else 1

    if args.command == "compare":
        summaries = _read_summaries(args.first, args.second)
        if summaries is None:
            return USAGE_ERROR
        changed = diff_outcomes(*summaries)
        for name, (a, b) in changed.items():
            print(f"{name}: {a} -> {b}")
        if changed:
            logger.warning("%d scenario(s) changed outcome between runs", len(changed))
            return 1
        print("Outcomes identical")
        return 0

    test_path = getattr(args, "path", "")
    if test_path:
        exists, message = verify_path_exists(test_path)
        if not exists:
            logger.error(message)
            return USAGE_ERROR

    command = build_command(args.command, settings, test_path)
    settings.artifacts_dir.mkdir(parents=True, exist_ok=True)
    return _run_command(command)


if __name__ == "__main__":
    sys.exit(main())
