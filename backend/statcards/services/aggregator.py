from typing import Any, Dict, Iterable, List, Optional

from ..datasources.base import RepositoryNode
from ..errors import MissingStatsError
from ..schemas import ContributionStats, LanguageUsage

TOP_LANGUAGES = 5

STATS_FIELDS = {
    "commits": "totalCommitContributions",
    "pull_requests": "totalPullRequestContributions",
    "issues": "totalIssueContributions",
}


def aggregate_languages(repositories: Iterable[RepositoryNode], limit: int = TOP_LANGUAGES) -> List[LanguageUsage]:
    """Sum language bytes across repositories and keep the ``limit`` largest.

    Names are matched exactly. ``sorted`` is stable and dicts keep insertion
    order, so equal totals stay in first-seen order.
    """
    totals: Dict[str, int] = {}
    for repo in repositories:
        for edge in repo.get("languages", []):
            name = edge["language_name"]
            totals[name] = totals.get(name, 0) + int(edge.get("size_bytes") or 0)

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [LanguageUsage(name=name, size=size) for name, size in ranked[:limit]]


def derive_stats(contributions: Optional[Dict[str, Any]]) -> ContributionStats:
    if not contributions:
        raise MissingStatsError("contributions summary missing from GitHub response")
    missing = [field for field in STATS_FIELDS.values() if contributions.get(field) is None]
    if missing:
        raise MissingStatsError(f"contributions summary missing fields: {', '.join(missing)}")
    return ContributionStats(**{key: contributions[field] for key, field in STATS_FIELDS.items()})
