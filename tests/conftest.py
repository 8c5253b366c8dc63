"""Shared fixtures: Bitbucket event payloads and a clean environment."""

import copy
from typing import Any

import pytest

_ENV_VARS = (
    "TEAMS_HOSTNAME",
    "TEAMS_TIMEOUT",
    "RLOG_LOG_LEVEL",
    "RLOG_TRACE_LEVEL",
    "RLOG_FORMAT",
    "SERVER_HOST",
    "SERVER_PORT",
    "SERVER_HEALTH_PORT",
    "SERVER_HEALTH_ENABLED",
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
)


def _user(name: str, email: str, display: str, user_id: int) -> dict[str, Any]:
    return {
        "name": name,
        "emailAddress": email,
        "id": user_id,
        "displayName": display,
        "active": True,
        "slug": name,
        "type": "NORMAL",
        "links": {"self": [{"href": f"https://scm.example/users/{name}"}]},
    }


def _repo(slug: str) -> dict[str, Any]:
    return {
        "slug": slug,
        "id": 84,
        "name": slug,
        "hierarchyId": "af05451fdf2d4a1e9b8c",
        "scmId": "git",
        "state": "AVAILABLE",
        "statusMessage": "Available",
        "forkable": True,
        "project": {
            "key": "PRJ",
            "id": 84,
            "name": "Project",
            "public": False,
            "type": "NORMAL",
            "links": {"self": [{"href": "https://scm.example/projects/PRJ"}]},
        },
        "public": False,
        "links": {
            "clone": [{"href": f"ssh://git@scm.example:7999/prj/{slug}.git", "name": "ssh"}],
            "self": [{"href": f"https://scm.example/projects/PRJ/repos/{slug}/browse"}],
        },
    }


BASE_EVENT: dict[str, Any] = {
    "eventKey": "pr:opened",
    "date": "2023-04-12T10:00:00+0000",
    "actor": _user("bob", "b@x.com", "Bob B", 2),
    "pullRequest": {
        "id": 42,
        "version": 0,
        "title": "Fix bug",
        "state": "OPEN",
        "open": True,
        "closed": False,
        "createdDate": 1681293600000,
        "updatedDate": 1681293600000,
        "fromRef": {
            "id": "refs/heads/fix-bug",
            "displayId": "fix-bug",
            "latestCommit": "ef8755f06ee4b28c96a847a95cb8ec8ed6ddd1ca",
            "type": "BRANCH",
            "repository": _repo("service"),
        },
        "toRef": {
            "id": "refs/heads/main",
            "displayId": "main",
            "latestCommit": "178864a7d521b6f5e720b386b2c2b0ef8563e0dc",
            "type": "BRANCH",
            "repository": _repo("service"),
        },
        "locked": False,
        "author": {"user": _user("bob", "b@x.com", "Bob B", 2), "role": "AUTHOR", "approved": False, "status": "UNAPPROVED"},
        "reviewers": [
            {"user": _user("alice", "a@x.com", "Alice A", 1), "role": "REVIEWER", "approved": False, "status": "UNAPPROVED"},
        ],
        "participants": [],
        "links": {"self": [{"href": "https://scm.example/prs/42"}]},
    },
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests never see the caller's adaptor or proxy variables."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def pr_event() -> dict[str, Any]:
    """Bitbucket pr:opened event with one reviewer (alice) and author bob."""
    return copy.deepcopy(BASE_EVENT)
