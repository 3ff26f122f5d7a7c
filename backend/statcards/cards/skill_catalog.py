"""Lookup tables for the skills card.

Every table is keyed by the normalized skill key (lowercase, alphanumerics
only, see ``skill_key``). Adding a technology is a data change here plus,
optionally, an SVG file in ``icons/``.
"""
import re
from types import MappingProxyType

DEFAULT_GRADIENT = ("#8b5cf6", "#22d3ee")

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def skill_key(name: str) -> str:
    return _NON_ALNUM.sub("", (name or "").lower())


SKILL_GRADIENTS = MappingProxyType(
    {
        "react": ("#61dafb", "#3b82f6"),
        "reactjs": ("#61dafb", "#3b82f6"),
        "node": ("#10b981", "#22d3ee"),
        "nodejs": ("#10b981", "#22d3ee"),
        "typescript": ("#3178c6", "#3b82f6"),
        "javascript": ("#f59e0b", "#ef4444"),
        "python": ("#22d3ee", "#3b82f6"),
        "go": ("#22d3ee", "#10b981"),
        "golang": ("#22d3ee", "#10b981"),
        "rust": ("#ef4444", "#8b5cf6"),
        "html": ("#f59e0b", "#ef4444"),
        "css": ("#3b82f6", "#22d3ee"),
        "vue": ("#10b981", "#22d3ee"),
        "vuejs": ("#10b981", "#22d3ee"),
        "angular": ("#ef4444", "#8b5cf6"),
        "svelte": ("#ef4444", "#f59e0b"),
        "docker": ("#3b82f6", "#22d3ee"),
        "graphql": ("#e10098", "#8b5cf6"),
        "mongodb": ("#10b981", "#22d3ee"),
        "postgresql": ("#3b82f6", "#22d3ee"),
        "postgres": ("#3b82f6", "#22d3ee"),
        "redis": ("#ef4444", "#f59e0b"),
        "aws": ("#f59e0b", "#ef4444"),
        "azure": ("#3b82f6", "#22d3ee"),
        "gcp": ("#3b82f6", "#10b981"),
        "tailwind": ("#22d3ee", "#3b82f6"),
        "tailwindcss": ("#22d3ee", "#3b82f6"),
    }
)

SKILL_LABELS = MappingProxyType(
    {
        "react": "React",
        "reactjs": "React",
        "node": "Node.js",
        "nodejs": "Node.js",
        "typescript": "TypeScript",
        "javascript": "JavaScript",
        "python": "Python",
        "go": "Go",
        "golang": "Go",
        "rust": "Rust",
        "html": "HTML",
        "css": "CSS",
        "vue": "Vue",
        "vuejs": "Vue",
        "angular": "Angular",
        "svelte": "Svelte",
        "docker": "Docker",
        "graphql": "GraphQL",
        "mongodb": "MongoDB",
        "postgresql": "PostgreSQL",
        "postgres": "PostgreSQL",
        "redis": "Redis",
        "aws": "AWS",
        "azure": "Azure",
        "gcp": "GCP",
        "tailwind": "Tailwind CSS",
        "tailwindcss": "Tailwind CSS",
    }
)

# key -> file name under icons/
SKILL_ICONS = MappingProxyType(
    {
        "react": "react.svg",
        "reactjs": "react.svg",
        "node": "nodejs.svg",
        "nodejs": "nodejs.svg",
        "typescript": "typescript.svg",
        "javascript": "javascript.svg",
        "python": "python.svg",
        "go": "go.svg",
        "golang": "go.svg",
        "docker": "docker.svg",
        "graphql": "graphql.svg",
        "html": "html.svg",
        "css": "css.svg",
    }
)
