"""axe-core accessibility scan wrapper.

The scanner script is injected into the loaded page and ``axe.run`` is
evaluated in the browser. Results are reduced to an
:class:`AccessibilityReport` which the scenario judges against a severity
threshold and may persist as a JSON artifact.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Sequence

from playwright.sync_api import Page

from storefront_e2e.errors import AccessibilityViolationError
from storefront_e2e.utils.config import DEFAULT_AXE_SCRIPT_URL, SEVERITIES
from storefront_e2e.utils.logging_utils import get_logger

logger = get_logger("a11y")

DEFAULT_TAGS = ("wcag2a", "wcag2aa")

_AXE_RUN_SCRIPT = """
async (tags) => {
    return await axe.run(document, {
        runOnly: { type: 'tag', values: tags },
        resultTypes: ['violations'],
    });
}
"""


def severity_rank(impact: str | None) -> int:
    """Position of ``impact`` in minor < moderate < serious < critical.

    Unknown or missing impacts rank below ``minor``.
    """
    try:
        return SEVERITIES.index((impact or "").lower())
    except ValueError:
        return -1


@dataclass(frozen=True)
class Violation:
    """One failed axe rule and the elements it failed on."""

    rule_id: str
    impact: str
    description: str = ""
    help_url: str = ""
    targets: tuple[str, ...] = ()

    @classmethod
    def from_axe(cls, raw: dict[str, Any]) -> "Violation":
        targets: list[str] = []
        for node in raw.get("nodes", []) or []:
            # axe targets are lists of selectors (iframes nest them).
            target = node.get("target") or []
            targets.append(" > ".join(str(part) for part in target))
        return cls(
            rule_id=raw.get("id", "unknown"),
            impact=raw.get("impact") or "unknown",
            description=raw.get("help") or raw.get("description", ""),
            help_url=raw.get("helpUrl", ""),
            targets=tuple(targets),
        )


@dataclass
class AccessibilityReport:
    """Snapshot of violations for a single page load."""

    url: str
    violations: list[Violation] = field(default_factory=list)

    @classmethod
    def from_axe_results(cls, url: str, raw: dict[str, Any]) -> "AccessibilityReport":
        return cls(url=url, violations=[Violation.from_axe(v) for v in raw.get("violations", [])])

    def at_or_above(self, threshold: str) -> list[Violation]:
        """Violations whose impact is ``threshold`` or worse."""
        if threshold not in SEVERITIES:
            raise ValueError(f"Unknown severity {threshold!r}; expected one of {SEVERITIES}")
        floor = severity_rank(threshold)
        return [v for v in self.violations if severity_rank(v.impact) >= floor]

    def rule_ids(self) -> set[str]:
        return {v.rule_id for v in self.violations}

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "violation_count": len(self.violations),
            "violations": [asdict(v) for v in self.violations],
        }

    def save(self, path: str | Path) -> Path:
        """Write the report as JSON and return the path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info("Accessibility report written to %s", target)
        return target


def scan_page(
    page: Page,
    script_url: str = DEFAULT_AXE_SCRIPT_URL,
    tags: Sequence[str] = DEFAULT_TAGS,
) -> AccessibilityReport:
    """Run axe-core against the page currently loaded in ``page``."""
    logger.info("Running accessibility scan on %s (tags=%s)", page.url, ",".join(tags))
    page.add_script_tag(url=script_url)
    raw = page.evaluate(_AXE_RUN_SCRIPT, list(tags))
    report = AccessibilityReport.from_axe_results(page.url, raw)
    logger.info("Accessibility scan found %d violation(s)", len(report.violations))
    return report


def assert_no_violations(report: AccessibilityReport, threshold: str = "serious") -> None:
    """Fail when any violation is at or above ``threshold``."""
    offending = report.at_or_above(threshold)
    if offending:
        raise AccessibilityViolationError(report.url, threshold, offending)
