"""Root conftest: command line options and fixtures shared by all test layers."""

from __future__ import annotations

import os
import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest

E2E_ENV_FLAG = "STOREFRONT_E2E"


def pytest_addoption(parser):
    parser.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="Run browser scenarios against the live storefront",
    )


def _e2e_enabled(config) -> bool:
    return config.getoption("--e2e") or os.environ.get(E2E_ENV_FLAG, "").lower() in {"1", "true", "yes"}


def pytest_collection_modifyitems(config, items):
    """Browser scenarios hit a live site, so they only run on request."""
    if _e2e_enabled(config):
        return
    skip_e2e = pytest.mark.skip(reason=f"live browser test; pass --e2e or set {E2E_ENV_FLAG}=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture()
def clean_env():
    """Clear every STOREFRONT_* variable so settings fall back to defaults."""
    with patch.dict(os.environ, {}, clear=False):
        for key in [k for k in os.environ if k.startswith("STOREFRONT_")]:
            os.environ.pop(key)
        yield


@pytest.fixture()
def axe_results() -> dict:
    """A trimmed ``axe.run`` result with one violation per impact level."""
    return {
        "url": "https://shop.example/",
        "violations": [
            {
                "id": "color-contrast",
                "impact": "serious",
                "help": "Elements must meet minimum color contrast ratio thresholds",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.9/color-contrast",
                "nodes": [{"target": [".price-new"]}, {"target": ["#footer", "a.info"]}],
            },
            {
                "id": "image-alt",
                "impact": "critical",
                "help": "Images must have alternate text",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.9/image-alt",
                "nodes": [{"target": ["img.banner"]}],
            },
            {
                "id": "region",
                "impact": "moderate",
                "help": "All page content should be contained by landmarks",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.9/region",
                "nodes": [{"target": ["#topnav"]}],
            },
            {
                "id": "landmark-unique",
                "impact": "minor",
                "help": "Landmarks should have a unique role or role/label/title",
                "nodes": [],
            },
        ],
    }


@pytest.fixture()
def junit_file(tmp_path: Path):
    """Write a JUnit XML document around ``body`` and return its path."""

    def _write(name: str, body: str) -> Path:
        path = tmp_path / name
        document = (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<testsuites><testsuite name="pytest">\n'
            f"{textwrap.dedent(body).strip()}\n"
            "</testsuite></testsuites>\n"
        )
        path.write_text(document, encoding="utf-8")
        return path

    return _write
