"""Keyword classification of goods descriptions into compliance categories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from freightcheck.compliance.categories import (
    CRITICAL_CATEGORIES,
    PROHIBITED_CATEGORIES,
    RESTRICTED_CATEGORIES,
)


@dataclass(frozen=True)
class ItemClassification:
    prohibited: tuple[str, ...] = ()
    restricted: tuple[str, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not self.prohibited and not self.restricted


def _matching_categories(
    description: str,
    vocabulary: Mapping[str, tuple[str, ...]],
    only: Iterable[str] | None = None,
) -> tuple[str, ...]:
    allowed = set(only) if only is not None else None
    matched: list[str] = []
    for category, keywords in vocabulary.items():
        if allowed is not None and category not in allowed:
            continue
        if any(keyword in description for keyword in keywords):
            matched.append(category)
    return tuple(matched)


class ItemClassifier:
    """Maps a free-text description onto prohibited and restricted categories.

    A category matches when any of its keywords is a substring of the
    lower-cased description. Categories are independent, so one description can
    land in several prohibited and restricted categories at once.
    """

    def __init__(
        self,
        prohibited: Mapping[str, tuple[str, ...]] = PROHIBITED_CATEGORIES,
        restricted: Mapping[str, tuple[str, ...]] = RESTRICTED_CATEGORIES,
    ) -> None:
        self._prohibited = prohibited
        self._restricted = restricted

    def classify(self, description: str | None) -> ItemClassification:
        lowered = (description or "").lower()
        if not lowered:
            return ItemClassification()
        return ItemClassification(
            prohibited=_matching_categories(lowered, self._prohibited),
            restricted=_matching_categories(lowered, self._restricted),
        )

    def classify_critical(self, description: str | None) -> ItemClassification:
        """Prohibited scan limited to the categories blocked even domestically."""
        lowered = (description or "").lower()
        if not lowered:
            return ItemClassification()
        return ItemClassification(
            prohibited=_matching_categories(lowered, self._prohibited, only=CRITICAL_CATEGORIES),
        )
