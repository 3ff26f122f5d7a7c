from typing import List, Optional, Protocol


class RepositoryLanguageEdge(dict):
    """One (repository, language, bytes) triple as reported by GitHub."""

    repo_id: str
    language_name: str
    size_bytes: int


class RepositoryNode(dict):
    id: str
    name: str
    languages: List[RepositoryLanguageEdge]


class UserProfile(dict):
    """Raw, unaggregated profile data for one user."""

    repositories: List[RepositoryNode]
    contributions: Optional[dict]


class ProfileSource(Protocol):
    async def fetch_user_profile(self, username: str) -> UserProfile:
        ...
