from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from ..config import get_settings
from ..errors import GraphProtocolError, RemoteFetchError, UserNotFoundError
from .base import ProfileSource, RepositoryLanguageEdge, RepositoryNode, UserProfile

PAGE_SIZE = 100
LANGUAGES_PER_REPO = 10

PROFILE_QUERY = """
query getGithubProfileData($username: String!, $cursor: String, $withContributions: Boolean!) {
  user(login: $username) {
    contributionsCollection @include(if: $withContributions) {
      totalCommitContributions
      totalPullRequestContributions
      totalIssueContributions
    }
    repositories(
      first: %d
      after: $cursor
      privacy: PUBLIC
      ownerAffiliations: OWNER
      isFork: false
    ) {
      pageInfo {
        hasNextPage
        endCursor
      }
      nodes {
        id
        name
        languages(first: %d, orderBy: { field: SIZE, direction: DESC }) {
          edges {
            size
            node {
              name
            }
          }
        }
      }
    }
  }
}
""" % (PAGE_SIZE, LANGUAGES_PER_REPO)


class GitHubGraphQLAdapter(ProfileSource):
    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.settings = get_settings()
        headers = {
            "Content-Type": "application/json",
            "User-Agent": "statcards",
        }
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        self.headers = headers
        self.url = str(self.settings.github_graphql_url)
        if client is None:
            client_kwargs: Dict[str, Any] = {"timeout": self.settings.github_timeout_seconds}
            if self.settings.github_proxy:
                client_kwargs["proxy"] = self.settings.github_proxy
            client = httpx.AsyncClient(**client_kwargs)
        self.client = client

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _post(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = await self.client.post(
                self.url, json={"query": PROFILE_QUERY, "variables": variables}, headers=self.headers
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text
            status = exc.response.status_code
            logger.warning(f"[graphql] GitHub responded {status} for {variables.get('username')}")
            raise RemoteFetchError(f"GitHub API error: {status} {body}") from exc
        except httpx.RequestError as exc:
            logger.warning(f"[graphql] request failed: {type(exc).__name__}")
            raise RemoteFetchError(f"GitHub request error: {type(exc).__name__} {exc!r}") from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise RemoteFetchError("GitHub API returned a non-JSON body") from exc

    @staticmethod
    def _extract_user(payload: Dict[str, Any], username: str) -> Dict[str, Any]:
        user = (payload.get("data") or {}).get("user")
        errors = payload.get("errors") or []
        if errors:
            if user is None and all(err.get("type") == "NOT_FOUND" for err in errors):
                raise UserNotFoundError(username)
            raise GraphProtocolError([err.get("message", "unknown error") for err in errors])
        if user is None:
            raise UserNotFoundError(username)
        return user

    async def fetch_user_profile(self, username: str) -> UserProfile:
        repositories: List[RepositoryNode] = []
        contributions: Optional[dict] = None
        cursor: Optional[str] = None
        page = 0

        logger.info(f"[graphql] fetching profile for {username}")
        while True:
            variables = {"username": username, "cursor": cursor, "withContributions": page == 0}
            user = self._extract_user(await self._post(variables), username)
            if page == 0:
                contributions = user.get("contributionsCollection")

            connection = user.get("repositories") or {}
            for node in connection.get("nodes") or []:
                if not node:
                    continue
                repo_id = node.get("id") or node.get("name") or ""
                edges = (node.get("languages") or {}).get("edges") or []
                repositories.append(
                    RepositoryNode(
                        {
                            "id": repo_id,
                            "name": node.get("name"),
                            "languages": [
                                RepositoryLanguageEdge(
                                    {
                                        "repo_id": repo_id,
                                        "language_name": edge["node"]["name"],
                                        "size_bytes": edge.get("size", 0),
                                    }
                                )
                                for edge in edges
                                if edge and edge.get("node")
                            ],
                        }
                    )
                )

            page += 1
            page_info = connection.get("pageInfo") or {}
            if not page_info.get("hasNextPage") or not page_info.get("endCursor"):
                break
            cursor = page_info["endCursor"]

        logger.info(f"[graphql] fetched {len(repositories)} repositories for {username} in {page} page(s)")
        return UserProfile({"repositories": repositories, "contributions": contributions})
