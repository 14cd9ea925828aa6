"""Shared test fixtures."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

CATALOG_YAML = textwrap.dedent("""\
    apiVersion: backstage.io/v1alpha1
    kind: Component
    metadata:
      name: svc-a
      tags: [ruby]
      annotations:
        github.com/project-slug: acme/svc-a
    spec:
      type: api
      owner: team-a
""")


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """A single-entity catalog-info.yaml on disk."""
    path = tmp_path / "catalog-info.yaml"
    path.write_text(CATALOG_YAML, encoding="utf-8")
    return path
