"""Shared pytest fixtures for the napi-scaffold test suite.

Provides reusable fixtures for:
- Temporary project directories
- Project and configuration models
- Isolation from the NAPI_* environment variables
"""

from __future__ import annotations

from pathlib import Path

import pytest

from napi_scaffold.config import Config
from napi_scaffold.scaffolder import ProjectConfig


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_napi_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's NAPI_DEBUG from leaking into the tests."""
    for var in ("NAPI_DEBUG", "NAPI_SCAFFOLD_LICENSE", "NAPI_SCAFFOLD_ON_UNSUPPORTED"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Destination for a generated project (not created yet)."""
    return tmp_path / "my-addon"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

@pytest.fixture
def default_project() -> ProjectConfig:
    """A scoped package built for the three default targets."""
    return ProjectConfig(
        name="@napi-rs/my-addon",
        targets=[
            "x86_64-apple-darwin",
            "x86_64-pc-windows-msvc",
            "x86_64-unknown-linux-gnu",
        ],
    )


@pytest.fixture
def mixed_project() -> ProjectConfig:
    """A project mixing parseable and rejected triples."""
    return ProjectConfig(
        name="mixed",
        targets=[
            "x86_64-unknown-linux-musl",
            "aarch64-apple-darwin",
            "i686-pc-windows-msvc",
        ],
        type_def=True,
        github_actions=True,
    )


@pytest.fixture
def config() -> Config:
    return Config()
