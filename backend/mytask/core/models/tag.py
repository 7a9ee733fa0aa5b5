from __future__ import annotations

from pydantic import Field

from .base import StoredModel


class Tag(StoredModel):
    """Tag domain model.

    Tags are never mutated after creation; there is no rename or recolour.
    """

    id: str = Field(min_length=1, description="Unique, opaque tag identifier")
    label: str = Field(description="Display label, unique ignoring case")
    color: str = Field(description="Display colour, opaque to the domain")

    model_config = {"frozen": True}


DEFAULT_TAGS: tuple[Tag, ...] = (
    Tag(id="1", label="Famille", color="#CBD5E1"),
    Tag(id="2", label="Ecole", color="#FF5E78"),
    Tag(id="3", label="Finance", color="#CBD5E1"),
    Tag(id="4", label="Boulot", color="#94A3B8"),
    Tag(id="5", label="Politique", color="#CBD5E1"),
)

PROTECTED_TAG_IDS: frozenset[str] = frozenset(tag.id for tag in DEFAULT_TAGS)

# Tasks whose tag is deleted are moved to the first default tag.
FALLBACK_TAG_ID: str = DEFAULT_TAGS[0].id

COLOR_PALETTE: tuple[str, ...] = (
    "#FF5E78",
    "#D8B4FE",
    "#9333EA",
    "#1E293B",
    "#F97316",
    "#14B8A6",
    "#06B6D4",
    "#B45309",
    "#EF4444",
    "#6366F1",
)


def default_tags() -> list[Tag]:
    """Return a fresh list holding the default tag set."""
    return list(DEFAULT_TAGS)


def normalize_label(label: str) -> str:
    """Comparison key for tag labels: trimmed and case-folded."""
    return label.strip().lower()
