"""Tests for the deployment pipeline."""

import json
import os

import pytest

from projection.api.exceptions import GitCommandError
from projection.constants import (
    ISSUE_CONFIG_FAILED,
    ISSUE_GIT_NOT_INSTALLED,
    ISSUE_NO_PROJECTS_FILE,
    ISSUE_NO_REMOTE,
    ISSUE_NOT_A_REPOSITORY,
    ErrorCode,
)
from projection.models import DeployOptions
from projection.services.deploy_service import DeploymentPipeline, project_lock

from fakes import FakeInspector, RecordingBuilder, RecordingPublisher, git, requires_git


def snapshot(root):
    """Every path under root with its size and modification time."""
    entries = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            path = os.path.join(dirpath, name)
            stat = os.stat(path)
            entries[path] = (stat.st_size, stat.st_mtime_ns)
    return entries


class TestDryRun:
    """Tests for dry runs."""

    def test_reports_plan_without_side_effects(self, pipeline, project_dir, builder, publisher):
        before = snapshot(project_dir)

        result = pipeline.run(project_dir, DeployOptions(dry_run=True))

        assert result.success is True
        assert result.message == "Dry run complete. No deployment was performed."
        assert result.url == "https://u.github.io/r"
        assert result.branch == "gh-pages"
        assert result.error is None
        assert result.plan.base_url == "/r/"
        assert builder.calls == []
        assert publisher.requests == []
        assert snapshot(project_dir) == before

    def test_dry_run_still_validates(self, project_dir, builder, publisher):
        pipeline = DeploymentPipeline(
            inspector=FakeInspector(is_repo=False), builder=builder, publisher=publisher
        )

        result = pipeline.run(project_dir, DeployOptions(dry_run=True))

        assert result.success is False
        assert result.error.code == ErrorCode.VALIDATION_ERROR


class TestDeploy:
    """Tests for full deployments."""

    def test_builds_and_publishes(self, pipeline, project_dir, builder, publisher):
        result = pipeline.run(project_dir, DeployOptions())

        assert result.success is True
        assert result.message == "Deployment completed successfully"
        assert result.url == "https://u.github.io/r"
        assert result.duration_ms >= 0
        assert builder.calls == [(project_dir.resolve(), project_dir.resolve() / "dist", "/r/")]

        request = publisher.requests[0]
        assert request.source_dir == project_dir.resolve() / "dist"
        assert request.branch == "gh-pages"
        assert request.force is False
        assert (project_dir / "dist" / ".nojekyll").exists()

    def test_options_override_plan(self, pipeline, project_dir, builder, publisher):
        options = DeployOptions(branch="pages", build_dir="public", message="Ship it", force=True)

        result = pipeline.run(project_dir, options)

        assert result.success is True
        assert result.branch == "pages"
        request = publisher.requests[0]
        assert request.source_dir == project_dir.resolve() / "public"
        assert request.message == "Ship it"
        assert request.force is True

    def test_build_always_cleans(self, pipeline, project_dir):
        stale = project_dir / "dist" / "stale.html"
        stale.parent.mkdir()
        stale.write_text("old", encoding="utf-8")

        pipeline.run(project_dir, DeployOptions())

        assert not stale.exists()

    def test_no_build_skips_build(self, pipeline, project_dir, builder, publisher):
        (project_dir / "dist").mkdir()
        (project_dir / "dist" / "index.html").write_text("prebuilt", encoding="utf-8")

        result = pipeline.run(project_dir, DeployOptions(no_build=True))

        assert result.success is True
        assert builder.calls == []
        assert len(publisher.requests) == 1
        assert (project_dir / "dist" / "index.html").read_text() == "prebuilt"

    def test_no_build_without_output(self, pipeline, project_dir, publisher):
        result = pipeline.run(project_dir, DeployOptions(no_build=True))

        assert result.success is False
        assert result.error.code == ErrorCode.CONFIG_ERROR
        assert "Build directory not found" in result.error.message
        assert publisher.requests == []

    def test_reporter_receives_stages_in_order(self, pipeline, project_dir):
        stages = []

        pipeline.run(project_dir, DeployOptions(), reporter=lambda stage, message: stages.append(stage))

        assert stages == [
            "check_git",
            "validate_repository",
            "locate_project_data",
            "resolve_config",
            "build",
            "publish",
            "done",
        ]

    def test_custom_domain(self, pipeline, project_dir, publisher):
        (project_dir / "projection.config.json").write_text(
            json.dumps({"homepage": "www.example.com"}), encoding="utf-8"
        )

        result = pipeline.run(project_dir, DeployOptions())

        assert result.url == "https://www.example.com"
        assert (project_dir / "dist" / "CNAME").read_text() == "www.example.com"


class TestFailures:
    """Tests for classified failures."""

    @pytest.mark.parametrize("inspector,message", [
        (FakeInspector(installed=False), ISSUE_GIT_NOT_INSTALLED),
        (FakeInspector(is_repo=False), "Not a git repository"),
        (FakeInspector(remotes={}), "No git remote 'origin' found"),
    ])
    def test_git_gates(self, project_dir, builder, publisher, inspector, message):
        pipeline = DeploymentPipeline(inspector=inspector, builder=builder, publisher=publisher)

        result = pipeline.run(project_dir, DeployOptions())

        assert result.success is False
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert result.error.message == message
        assert result.duration_ms >= 0
        assert result.url is None
        assert builder.calls == []
        assert publisher.requests == []

    def test_missing_project_data(self, pipeline, tmp_path, builder, publisher):
        result = pipeline.run(tmp_path, DeployOptions())

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert result.error.message == ISSUE_NO_PROJECTS_FILE
        assert "projects.yaml" in result.error.solution
        assert builder.calls == []

    def test_invalid_config(self, pipeline, project_dir, builder):
        (project_dir / "projection.config.json").write_text('{"output": 1}', encoding="utf-8")

        result = pipeline.run(project_dir, DeployOptions())

        assert result.error.code == ErrorCode.CONFIG_ERROR
        assert builder.calls == []

    def test_build_failure(self, project_dir, publisher):
        builder = RecordingBuilder(error=RuntimeError("Invalid project 'demo': missing title"))
        pipeline = DeploymentPipeline(inspector=FakeInspector(), builder=builder, publisher=publisher)

        result = pipeline.run(project_dir, DeployOptions())

        assert result.success is False
        assert result.error.code == ErrorCode.BUILD_ERROR
        assert "Invalid project 'demo': missing title" in result.error.details
        assert result.plan is not None
        assert publisher.requests == []

    def test_auth_failure(self, project_dir, builder):
        """Test a publickey rejection is reported as an authentication error."""
        error = GitCommandError(
            ["git", "push", "origin", "HEAD:refs/heads/gh-pages"], 128,
            "git@github.com: Permission denied (publickey).\nfatal: Could not read from remote repository."
        )
        pipeline = DeploymentPipeline(
            inspector=FakeInspector(), builder=builder, publisher=RecordingPublisher(error=error)
        )

        result = pipeline.run(project_dir, DeployOptions())

        assert result.success is False
        assert result.error.code == ErrorCode.AUTH_ERROR
        assert "Permission denied (publickey)" in result.error.details
        assert result.to_dict()["error"]["code"] == "AUTH_ERROR"

    def test_local_permission_failure(self, project_dir, builder):
        """Test a filesystem permission error is not reported as authentication."""
        error = PermissionError(13, "Permission denied", str(project_dir / "dist" / ".nojekyll"))
        pipeline = DeploymentPipeline(
            inspector=FakeInspector(), builder=builder, publisher=RecordingPublisher(error=error)
        )

        result = pipeline.run(project_dir, DeployOptions())

        assert result.success is False
        assert result.error.code == ErrorCode.DEPLOYMENT_ERROR
        assert ".nojekyll" in result.error.details

    def test_unexpected_errors_propagate(self, project_dir, builder):
        pipeline = DeploymentPipeline(
            inspector=FakeInspector(), builder=builder,
            publisher=RecordingPublisher(error=KeyError("bug"))
        )

        with pytest.raises(KeyError):
            pipeline.run(project_dir, DeployOptions())

    def test_concurrent_deploy_is_rejected(self, pipeline, project_dir, publisher):
        with project_lock(project_dir):
            result = pipeline.run(project_dir, DeployOptions())

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert "already running" in result.error.message
        assert publisher.requests == []

        assert pipeline.run(project_dir, DeployOptions()).success is True

    def test_other_projects_are_not_blocked(self, pipeline, project_dir, tmp_path):
        other = tmp_path / "other"
        other.mkdir()
        (other / "projects.json").write_text("[]", encoding="utf-8")

        with project_lock(project_dir):
            assert pipeline.run(other, DeployOptions()).success is True


class TestStatus:
    """Tests for readiness reports."""

    def test_git_not_installed(self, tmp_path):
        status = DeploymentPipeline(inspector=FakeInspector(installed=False)).status(tmp_path)

        data = status.to_dict()
        assert data["ready"] is False
        assert data["gitInstalled"] is False
        assert data["issues"] == [ISSUE_GIT_NOT_INSTALLED]

    def test_repository_without_remote(self, project_dir):
        status = DeploymentPipeline(inspector=FakeInspector(remotes={})).status(project_dir)

        data = status.to_dict()
        assert data["ready"] is False
        assert data["isGitRepo"] is True
        assert data["hasRemote"] is False
        assert data["issues"] == [ISSUE_NO_REMOTE]
        assert "deployConfig" not in data

    def test_every_failed_check_is_listed(self, tmp_path):
        status = DeploymentPipeline(inspector=FakeInspector(is_repo=False)).status(tmp_path)

    def test_non_repository_with_project_data(self, project_dir):
        status = DeploymentPipeline(inspector=FakeInspector(is_repo=False)).status(project_dir)

        assert status.issues == [ISSUE_NOT_A_REPOSITORY, ISSUE_NO_REMOTE]
        assert status.plan is None

        assert status.issues == [ISSUE_NOT_A_REPOSITORY, ISSUE_NO_REMOTE, ISSUE_NO_PROJECTS_FILE]

    def test_ready(self, project_dir):
        status = DeploymentPipeline(inspector=FakeInspector()).status(project_dir)

        data = status.to_dict()
        assert data["ready"] is True
        assert "issues" not in data
        assert data["remoteUrl"] == "https://github.com/u/r.git"
        assert data["currentBranch"] == "main"
        assert data["deployConfig"] == {
            "branch": "gh-pages",
            "baseUrl": "/r/",
            "homepage": None,
            "buildDir": "dist",
        }

    def test_invalid_config(self, project_dir):
        (project_dir / "projection.config.json").write_text("[]", encoding="utf-8")

        status = DeploymentPipeline(inspector=FakeInspector()).status(project_dir)

        assert status.issues == [ISSUE_CONFIG_FAILED]

    def test_config(self, project_dir):
        plan = DeploymentPipeline(inspector=FakeInspector()).config(project_dir)

        assert plan.branch == "gh-pages"
        assert plan.build_dir == "dist"
        assert plan.base_url == "/r/"


@requires_git
class TestEndToEnd:
    """Deployments against a real repository and a local bare remote."""

    def test_deploy_existing_build(self, git_project):
        root, remote = git_project
        (root / "dist").mkdir()
        (root / "dist" / "index.html").write_text("<h1>Hi</h1>", encoding="utf-8")

        result = DeploymentPipeline().run(root, DeployOptions(no_build=True, message="First"))

        assert result.success is True, result.error
        assert result.branch == "gh-pages"
        files = git("--git-dir", str(remote), "ls-tree", "--name-only", "gh-pages").splitlines()
        assert sorted(files) == [".nojekyll", "index.html"]
        assert git("--git-dir", str(remote), "log", "-1", "--format=%s", "gh-pages") == "First"

    def test_status(self, git_project):
        root, remote = git_project

        status = DeploymentPipeline().status(root)

        assert status.ready is True
        assert status.git.remote_url == str(remote)
        assert status.plan.base_url == "/remote/"

    def test_unknown_remote(self, git_project):
        root, _ = git_project

        result = DeploymentPipeline().run(root, DeployOptions(remote="upstream", dry_run=True))

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert "upstream" in result.error.message
