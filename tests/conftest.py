"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from projection.services.deploy_service import DeploymentPipeline

from fakes import FakeInspector, RecordingBuilder, RecordingPublisher, git


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Portfolio project with a project data file."""
    root = tmp_path / "portfolio"
    root.mkdir()
    (root / "projects.yaml").write_text("projects: []\n", encoding="utf-8")
    return root


@pytest.fixture
def inspector() -> FakeInspector:
    return FakeInspector()


@pytest.fixture
def builder() -> RecordingBuilder:
    return RecordingBuilder()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def pipeline(inspector, builder, publisher) -> DeploymentPipeline:
    return DeploymentPipeline(inspector=inspector, builder=builder, publisher=publisher)


@pytest.fixture
def git_project(tmp_path: Path):
    """Real repository with a bare remote named origin.

    Returns (project_root, remote_path).
    """
    remote = tmp_path / "remote.git"
    git("init", "--quiet", "--bare", str(remote))

    root = tmp_path / "site-project"
    root.mkdir()
    git("init", "--quiet", cwd=root)
    git("symbolic-ref", "HEAD", "refs/heads/main", cwd=root)
    git("config", "user.name", "Projection Tests", cwd=root)
    git("config", "user.email", "tests@example.com", cwd=root)
    git("config", "commit.gpgsign", "false", cwd=root)
    git("remote", "add", "origin", str(remote), cwd=root)
    (root / "projects.yaml").write_text("projects: []\n", encoding="utf-8")
    return root, remote
