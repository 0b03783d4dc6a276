"""Failure taxonomy shared by page objects, scans and the CLI."""

from __future__ import annotations

from typing import Sequence


class StorefrontE2EError(Exception):
    """Base class for errors raised by the storefront test support code."""


class ConfigurationError(StorefrontE2EError, ValueError):
    """An environment variable holds a value the suite cannot use."""


class LocatorNotFoundError(StorefrontE2EError, TimeoutError):
    """No selector in a fallback chain resolved to a visible element."""

    def __init__(self, selectors: Sequence[str], timeout: float) -> None:
        self.selectors = list(selectors)
        self.timeout = timeout
        super().__init__(
            f"Locator not found after {timeout:.0f}ms; tried selectors: {self.selectors}"
        )


class NavigationError(StorefrontE2EError):
    """The browser failed to load a page."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class AccessibilityViolationError(StorefrontE2EError, AssertionError):
    """An accessibility scan found violations at or above the threshold."""

    def __init__(self, url: str, threshold: str, violations: Sequence) -> None:
        self.url = url
        self.threshold = threshold
        self.violations = list(violations)
        lines = [
            f"{len(self.violations)} accessibility violation(s) at or above "
            f"'{threshold}' on {url}:"
        ]
        for violation in self.violations:
            targets = ", ".join(violation.targets) or "<no targets>"
            lines.append(f"- [{violation.impact}] {violation.rule_id}: {targets}")
        super().__init__("\n".join(lines))
