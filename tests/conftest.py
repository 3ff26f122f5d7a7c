"""
Pytest configuration and shared fixtures for the statcards tests.

The GitHub API is never contacted: remote responses are simulated either
with ``httpx.MockTransport`` or with an in-process fake profile source.
"""

from __future__ import annotations

import json
import os
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

# Set environment variables BEFORE any statcards imports (settings are cached)
os.environ.setdefault("GITHUB_TOKEN", "test_token_for_ci_only")  # pragma: allowlist secret
os.environ.setdefault("GITHUB_USERNAME", "octocat")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from statcards.datasources.base import RepositoryLanguageEdge, RepositoryNode, UserProfile  # noqa: E402
from statcards.datasources.github_graphql import GitHubGraphQLAdapter  # noqa: E402

CONTRIBUTIONS = {
    "totalCommitContributions": 120,
    "totalPullRequestContributions": 14,
    "totalIssueContributions": 7,
}


def make_repo(repo_id: str, languages: Dict[str, int]) -> RepositoryNode:
    return RepositoryNode(
        {
            "id": repo_id,
            "name": repo_id,
            "languages": [
                RepositoryLanguageEdge({"repo_id": repo_id, "language_name": name, "size_bytes": size})
                for name, size in languages.items()
            ],
        }
    )


def graphql_page(
    repos: List[Dict[str, Any]],
    end_cursor: Optional[str] = None,
    contributions: Optional[Dict[str, int]] = None,
) -> Dict[str, Any]:
    """Build one GraphQL ``user`` page; ``repos`` items are ``{"id", "languages": {name: size}}``."""
    user: Dict[str, Any] = {
        "repositories": {
            "pageInfo": {"hasNextPage": end_cursor is not None, "endCursor": end_cursor},
            "nodes": [
                {
                    "id": repo["id"],
                    "name": repo["id"],
                    "languages": {
                        "edges": [{"size": size, "node": {"name": name}} for name, size in repo["languages"].items()]
                    },
                }
                for repo in repos
            ],
        }
    }
    if contributions is not None:
        user["contributionsCollection"] = contributions
    return {"data": {"user": user}}


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProfileSource:
    """In-process stand-in for the GitHub adapter that counts fetches."""

    def __init__(self, profile: Optional[UserProfile] = None, error: Optional[Exception] = None):
        self.profile = profile
        self.error = error
        self.calls: List[str] = []

    async def fetch_user_profile(self, username: str) -> UserProfile:
        self.calls.append(username)
        if self.error is not None:
            raise self.error
        return self.profile

    async def aclose(self) -> None:
        pass


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_profile() -> UserProfile:
    return UserProfile(
        {
            "repositories": [
                make_repo("r1", {"Python": 5000, "Shell": 200}),
                make_repo("r2", {"Go": 3000, "Python": 1000}),
                make_repo("r3", {"TypeScript": 2500, "CSS": 400, "HTML": 300}),
            ],
            "contributions": dict(CONTRIBUTIONS),
        }
    )


@pytest.fixture
def adapter_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], GitHubGraphQLAdapter]:
    """Build an adapter whose HTTP calls are answered by ``handler``."""

    def build(handler: Callable[[httpx.Request], httpx.Response]) -> GitHubGraphQLAdapter:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GitHubGraphQLAdapter(client=client)

    return build


def request_variables(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content)["variables"]
