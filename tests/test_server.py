"""Tests for the admin HTTP API."""

import pytest
from fastapi.testclient import TestClient

from projection.api.deployer import Deployer
from projection.api.exceptions import GitCommandError
from projection.server import create_app
from projection.services.deploy_service import DeploymentPipeline

from fakes import FakeInspector, RecordingBuilder, RecordingPublisher


def make_client(project_dir, pipeline: DeploymentPipeline) -> TestClient:
    app = create_app(project_dir, deployer=Deployer(project_dir, pipeline=pipeline))
    return TestClient(app)


@pytest.fixture
def client(project_dir, pipeline):
    return make_client(project_dir, pipeline)


class TestStatusEndpoint:
    """Tests for GET /api/deploy/status."""

    def test_ready(self, client):
        response = client.get("/api/deploy/status")

        assert response.status_code == 200
        data = response.json()
        assert data["ready"] is True
        assert data["gitInstalled"] is True
        assert data["deployConfig"]["baseUrl"] == "/r/"

    def test_git_not_installed(self, project_dir):
        client = make_client(project_dir, DeploymentPipeline(inspector=FakeInspector(installed=False)))

        data = client.get("/api/deploy/status").json()

        assert data["ready"] is False
        assert data["gitInstalled"] is False
        assert data["issues"] == ["Git is not installed or not in PATH"]


class TestConfigEndpoint:
    """Tests for GET /api/deploy/config."""

    def test_config(self, client):
        response = client.get("/api/deploy/config")

        assert response.status_code == 200
        assert response.json() == {
            "repositoryUrl": "https://github.com/u/r.git",
            "branch": "gh-pages",
            "baseUrl": "/r/",
            "homepage": None,
            "buildDir": "dist",
        }

    def test_unresolvable(self, project_dir):
        client = make_client(project_dir, DeploymentPipeline(inspector=FakeInspector(remotes={})))

        response = client.get("/api/deploy/config")

        assert response.status_code == 500
        assert "No Git remote 'origin' found" in response.json()["message"]


class TestDeployEndpoint:
    """Tests for POST /api/deploy."""

    def test_deploy(self, client, builder, publisher):
        response = client.post("/api/deploy", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["url"] == "https://u.github.io/r"
        assert data["branch"] == "gh-pages"
        assert data["duration"] >= 0
        assert "error" not in data
        assert len(builder.calls) == 1
        assert publisher.requests[0].force is False

    def test_empty_body(self, client, publisher):
        response = client.post("/api/deploy")

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_force_and_message(self, client, publisher):
        response = client.post("/api/deploy", json={"force": True, "message": "From admin"})

        assert response.status_code == 200
        assert publisher.requests[0].force is True
        assert publisher.requests[0].message == "From admin"

    def test_force_must_be_boolean(self, client, publisher):
        response = client.post("/api/deploy", json={"force": "yes"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
        assert "force must be a boolean" in response.json()["message"]
        assert publisher.requests == []

    def test_message_must_be_string(self, client):
        response = client.post("/api/deploy", json={"message": 42})

        assert response.status_code == 400
        assert response.json()["message"] == "message must be a string"

    @pytest.mark.parametrize("body,message", [
        ({"force": None}, "force must be a boolean"),
        ({"message": None}, "message must be a string"),
    ])
    def test_null_fields_are_rejected(self, client, publisher, body, message):
        """Test an explicit null is not treated as an absent field."""
        response = client.post("/api/deploy", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request", "message": message}
        assert publisher.requests == []

    def test_body_must_be_object(self, client):
        response = client.post("/api/deploy", json=["force"])

        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be a JSON object"

    def test_malformed_json(self, client):
        response = client.post(
            "/api/deploy", content=b"{force", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_classified_failure_is_200(self, project_dir, builder):
        error = GitCommandError(["git", "push"], 1, "! [rejected] gh-pages (non-fast-forward)")
        client = make_client(project_dir, DeploymentPipeline(
            inspector=FakeInspector(), builder=builder, publisher=RecordingPublisher(error=error)
        ))

        response = client.post("/api/deploy", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "PUSH_REJECTED"
        assert "--force" in data["error"]["solution"]
        assert "url" not in data

    def test_validation_failure_is_200(self, tmp_path):
        client = make_client(tmp_path, DeploymentPipeline(
            inspector=FakeInspector(), builder=RecordingBuilder(), publisher=RecordingPublisher()
        ))

        data = client.post("/api/deploy", json={}).json()

        assert data["success"] is False
        assert data["error"]["code"] == "VALIDATION_ERROR"

    def test_unexpected_failure_is_500(self, project_dir, builder):
        client = make_client(project_dir, DeploymentPipeline(
            inspector=FakeInspector(), builder=builder,
            publisher=RecordingPublisher(error=KeyError("bug"))
        ))

        response = client.post("/api/deploy", json={})

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "DEPLOYMENT_ERROR"
