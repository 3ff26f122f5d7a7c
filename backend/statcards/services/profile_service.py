import asyncio
from typing import Dict, List, Optional

from loguru import logger

from ..config import get_settings
from ..datasources.base import ProfileSource
from ..errors import MissingUsernameError
from ..schemas import ContributionStats, LanguageUsage, ProfileAggregate
from .aggregator import aggregate_languages, derive_stats
from .cache import InMemoryCache

LANGUAGES_KIND = "languages"
STATS_KIND = "stats"


def cache_key(username: str, kind: str) -> str:
    return f"{username}:{kind}"


class ProfileService:
    """Cache-backed access to a user's aggregated languages and stats.

    Both cache entries for a user are only ever written together by
    ``refresh``, so they expire together.
    """

    def __init__(
        self,
        source: ProfileSource,
        cache: InMemoryCache,
        default_username: Optional[str] = None,
    ):
        self.source = source
        self.cache = cache
        self.default_username = default_username if default_username is not None else get_settings().github_username
        self._inflight: Dict[str, asyncio.Task] = {}

    def resolve_username(self, username: Optional[str]) -> str:
        resolved = (username or "").strip() or self.default_username
        if not resolved:
            raise MissingUsernameError("username is required")
        return resolved

    async def refresh(self, username: str) -> ProfileAggregate:
        """Fetch, aggregate and store both entries; concurrent calls share one fetch."""
        task = self._inflight.get(username)
        if task is None:
            task = asyncio.ensure_future(self._refresh(username))
            self._inflight[username] = task
            task.add_done_callback(lambda _: self._inflight.pop(username, None))
        else:
            logger.debug(f"[profile] joining in-flight refresh for {username}")
        return await asyncio.shield(task)

    async def _refresh(self, username: str) -> ProfileAggregate:
        profile = await self.source.fetch_user_profile(username)
        aggregate = ProfileAggregate(
            languages=aggregate_languages(profile["repositories"]),
            stats=derive_stats(profile.get("contributions")),
        )
        self.cache.set(
            cache_key(username, LANGUAGES_KIND),
            [lang.model_dump() for lang in aggregate.languages],
        )
        self.cache.set(cache_key(username, STATS_KIND), aggregate.stats.model_dump(by_alias=True))
        logger.info(
            f"[profile] refreshed {username}: {len(aggregate.languages)} languages, "
            f"{aggregate.stats.commits} commits"
        )
        return aggregate

    async def fetch_aggregated_languages(self, username: Optional[str] = None) -> List[LanguageUsage]:
        username = self.resolve_username(username)
        cached = self.cache.get(cache_key(username, LANGUAGES_KIND))
        if cached is not None:
            logger.debug(f"[profile] cache hit {username}:{LANGUAGES_KIND}")
            return [LanguageUsage.model_validate(item) for item in cached]
        logger.debug(f"[profile] cache miss {username}:{LANGUAGES_KIND}")
        return (await self.refresh(username)).languages

    async def fetch_aggregated_stats(self, username: Optional[str] = None) -> ContributionStats:
        username = self.resolve_username(username)
        cached = self.cache.get(cache_key(username, STATS_KIND))
        if cached is not None:
            logger.debug(f"[profile] cache hit {username}:{STATS_KIND}")
            return ContributionStats.model_validate(cached)
        logger.debug(f"[profile] cache miss {username}:{STATS_KIND}")
        return (await self.refresh(username)).stats
