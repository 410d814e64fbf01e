"""Tests for deployment status reporting."""

import json

import httpx
import pytest

from src.cli.deployment.helm_deployer.github_context import GitHubContext
from src.cli.deployment.helm_deployer.status import (
    DeploymentState,
    DeploymentStatusReporter,
)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


def make_client(requests_seen: list[httpx.Request], status_code: int = 201) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return httpx.Response(status_code, json={"id": 1})

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_posts_status_for_deployment(
    deployment_context: GitHubContext, requests_seen: list[httpx.Request]
) -> None:
    reporter = DeploymentStatusReporter(
        deployment_context, "t0ken", client=make_client(requests_seen)
    )

    reporter.notify(DeploymentState.SUCCESS)

    assert len(requests_seen) == 1
    request = requests_seen[0]
    assert request.method == "POST"
    assert str(request.url) == (
        "https://api.github.com/repos/acme/web/deployments/42/statuses"
    )
    assert request.headers["Authorization"] == "Bearer t0ken"
    assert request.headers["Accept"] == "application/vnd.github.ant-man-preview+json"
    body = json.loads(request.content)
    assert body == {
        "state": "success",
        "log_url": "https://github.com/acme/web/commit/abc123/checks",
        "target_url": "https://github.com/acme/web/commit/abc123/checks",
    }


def test_skipped_without_token(
    deployment_context: GitHubContext, requests_seen: list[httpx.Request]
) -> None:
    reporter = DeploymentStatusReporter(
        deployment_context, None, client=make_client(requests_seen)
    )

    reporter.notify(DeploymentState.PENDING)

    assert requests_seen == []
    assert not reporter.enabled


def test_skipped_without_deployment(
    github_context: GitHubContext, requests_seen: list[httpx.Request]
) -> None:
    reporter = DeploymentStatusReporter(
        github_context, "t0ken", client=make_client(requests_seen)
    )

    reporter.notify(DeploymentState.PENDING)

    assert requests_seen == []


def test_http_errors_are_not_raised(
    deployment_context: GitHubContext, requests_seen: list[httpx.Request]
) -> None:
    reporter = DeploymentStatusReporter(
        deployment_context, "t0ken", client=make_client(requests_seen, 500)
    )

    reporter.notify(DeploymentState.FAILURE)

    assert len(requests_seen) == 1


def test_transport_errors_are_not_raised(deployment_context: GitHubContext) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    reporter = DeploymentStatusReporter(deployment_context, "t0ken", client=client)

    reporter.notify(DeploymentState.PENDING)


def test_context_from_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps({"deployment": {"id": 7, "payload": {}}}))
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_path))
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/web")
    monkeypatch.setenv("GITHUB_SHA", "deadbeef")

    context = GitHubContext.from_env()

    assert context.deployment == {"id": 7, "payload": {}}
    assert context.owner == "acme"
    assert context.repo == "web"
    assert context.checks_url == "https://github.com/acme/web/commit/deadbeef/checks"


def test_context_without_event_file(monkeypatch: pytest.MonkeyPatch) -> None:
    context = GitHubContext.from_env({"GITHUB_EVENT_PATH": "/nonexistent/event.json"})

    assert context.deployment is None
