"""Filesystem helpers for run artifacts."""

from __future__ import annotations

import re
from pathlib import Path


def sanitize_node_id(node_id: str) -> str:
    """Turn a pytest node id into a safe directory name."""
    name = node_id.replace("::", "-").replace("/", "-")
    if name.endswith(".py"):
        name = name[:-3]
    name = re.sub(r"[^a-zA-Z0-9_.-]", "_", name)
    return name.strip("-_.") or "unnamed"


def artifact_dir_for(root: Path, node_id: str) -> Path:
    """Return (and create) the artifact directory for one test."""
    directory = Path(root) / sanitize_node_id(node_id)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def verify_path_exists(path: str) -> tuple[bool, str]:
    """Verify a path exists and is readable."""
    p = Path(path)
    if p.exists():
        return True, str(p)
    return False, f"Path not found: {path}"
