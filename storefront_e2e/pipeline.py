"""GitHub Actions workflow rendering for the e2e suite."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from storefront_e2e.utils.logging_utils import get_logger

logger = get_logger("pipeline")

DEFAULT_WORKFLOW_FILE = "e2e.yml"
DEFAULT_BRANCHES = ("main", "develop")
DEFAULT_TEST_COMMAND = "storefront-e2e test"


def render_workflow(
    branches: Sequence[str] = DEFAULT_BRANCHES,
    python_version: str = "3.11",
    browser: str = "chromium",
    test_command: str = DEFAULT_TEST_COMMAND,
    artifacts_dir: str = "artifacts",
) -> str:
    """Return the workflow YAML.

    The job exits with the test command's status; artifacts are uploaded even
    when the run fails.
    """
    if not branches:
        raise ValueError("At least one branch is required")
    branch_list = ", ".join(branches)

    return f'''name: Storefront E2E

on:
  push:
    branches: [ {branch_list} ]
  pull_request:
    branches: [ {branch_list} ]
  workflow_dispatch:

jobs:
  e2e:
    runs-on: ubuntu-latest
    timeout-minutes: 30

    env:
      STOREFRONT_BROWSER: {browser}
      STOREFRONT_ARTIFACTS_DIR: {artifacts_dir}
      STOREFRONT_LOG_JSON: "true"
      STOREFRONT_USERNAME: ${{{{ secrets.STOREFRONT_USERNAME }}}}
      STOREFRONT_PASSWORD: ${{{{ secrets.STOREFRONT_PASSWORD }}}}

    steps:
    - uses: actions/checkout@v4

    - name: Set up Python
      uses: actions/setup-python@v5
      with:
        python-version: '{python_version}'

    - name: Install dependencies
      run: |
        python -m pip install --upgrade pip
        pip install -e ".[test]"

    - name: Install browsers
      run: playwright install --with-deps {browser}

    - name: Run tests
      run: {test_command}

    - name: Upload artifacts
      if: always()
      uses: actions/upload-artifact@v4
      with:
        name: e2e-artifacts
        path: {artifacts_dir}/
        retention-days: 14
'''


def write_workflow(repo_root: str | Path, **options) -> Path:
    """Render the workflow into ``.github/workflows`` under ``repo_root``."""
    workflow_dir = Path(repo_root) / ".github" / "workflows"
    workflow_dir.mkdir(parents=True, exist_ok=True)
    workflow_file = workflow_dir / DEFAULT_WORKFLOW_FILE
    workflow_file.write_text(render_workflow(**options), encoding="utf-8")
    logger.info("Workflow generated at %s", workflow_file)
    return workflow_file
