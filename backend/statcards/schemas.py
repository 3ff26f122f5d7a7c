from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LanguageUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    size: int = Field(ge=0)  # bytes


class ContributionStats(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    commits: int = Field(default=0, ge=0)
    pull_requests: int = Field(default=0, ge=0, alias="pullRequests")
    issues: int = Field(default=0, ge=0)


class SkillEntry(BaseModel):
    name: str
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    @classmethod
    def normalize(cls, item: "str | dict | SkillEntry") -> "SkillEntry":
        """Accept a bare label, a ``{name, color}`` mapping or an entry."""
        if isinstance(item, SkillEntry):
            return item
        if isinstance(item, str):
            return cls(name=item)
        return cls(name=item.get("name") or "", color=item.get("color") or None)


class ProfileAggregate(BaseModel):
    model_config = ConfigDict(frozen=True)

    languages: List[LanguageUsage]
    stats: ContributionStats
