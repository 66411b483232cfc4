"""Pytest configuration and shared fixtures for sourcelinks tests."""

from pathlib import PurePosixPath

import pytest

from sourcelinks.source_links import SourceLinks, load

PROJECT_ROOT = PurePosixPath("/home/user/project")


@pytest.fixture
def project_root() -> PurePosixPath:
    """Absolute project root used by resolution tests."""
    return PROJECT_ROOT


@pytest.fixture
def reports() -> list[str]:
    """Collects warnings passed to the loader's report callback."""
    return []


@pytest.fixture
def github_links(project_root: PurePosixPath, reports: list[str]) -> SourceLinks:
    """SourceLinks with a docs sub-path link and a catch-all GitHub link."""
    return load(
        ["docs=github://org/docs-site/main", "github://org/repo"],
        revision="v1.0",
        project_root=project_root,
        report=reports.append,
    )
