"""Country regulation registry.

Loads the per-country regulatory profiles (restriction keywords, prohibited
and restricted goods categories, certificate schemes, tax/duty rates and
CFR / Ex-Works multipliers) from a versioned JSON snapshot. The registry is
read-only once built and is shared freely between evaluations.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Union

from freightcheck.compliance.categories import is_known_category

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

    SnapshotSource = Union[Path, Traversable]

logger = logging.getLogger(__name__)

REGULATIONS_FILENAME = "country_regulations.json"


class RegulationDataError(ValueError):
    """Raised when a regulation snapshot violates the registry schema."""


@dataclass(frozen=True)
class TaxRates:
    """Percentages (0-100) applied to the declared value."""

    export: float = 0.0
    import_: float = 0.0
    duty: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {"export": self.export, "import": self.import_, "duty": self.duty}


@dataclass(frozen=True)
class CountryRegulation:
    """Regulatory profile of a single country."""

    code: str
    name: str
    export_restrictions: tuple[str, ...]
    import_restrictions: tuple[str, ...]
    prohibited_item_categories: frozenset[str]
    restricted_item_categories: frozenset[str]
    requires_pre_inspection: bool
    certificate_types: tuple[str, ...]
    tax_rates: TaxRates
    cfr_multiplier: float
    x_work_multiplier: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "export_restrictions": list(self.export_restrictions),
            "import_restrictions": list(self.import_restrictions),
            "prohibited_item_categories": sorted(self.prohibited_item_categories),
            "restricted_item_categories": sorted(self.restricted_item_categories),
            "requires_pre_inspection": self.requires_pre_inspection,
            "certificate_types": list(self.certificate_types),
            "tax_rates": self.tax_rates.as_dict(),
            "cfr_multiplier": self.cfr_multiplier,
            "x_work_multiplier": self.x_work_multiplier,
        }


def default_snapshot_source() -> SnapshotSource:
    """Snapshot bundled with the package, unless FREIGHTCHECK_DATA_ROOT names a directory."""
    env_root = os.getenv("FREIGHTCHECK_DATA_ROOT")
    if env_root:
        return Path(env_root) / REGULATIONS_FILENAME
    return resources.files("freightcheck.compliance") / "data" / REGULATIONS_FILENAME


def normalize_country_code(code: str) -> str:
    return str(code).strip().upper()


def _percentage(raw: Any, field: str, code: str) -> float:
    value = float(raw or 0.0)
    if not 0.0 <= value <= 100.0:
        raise RegulationDataError(f"{code}: {field} must be within 0-100, got {value}")
    return value


def _fraction(raw: Any, field: str, code: str) -> float:
    value = float(raw)
    if not 0.0 <= value <= 1.0:
        raise RegulationDataError(f"{code}: {field} must be within 0-1, got {value}")
    return value


def _categories(raw: Iterable[Any], field: str, code: str) -> frozenset[str]:
    tags = frozenset(str(tag).strip().lower() for tag in raw)
    unknown = sorted(tag for tag in tags if not is_known_category(tag))
    if unknown:
        raise RegulationDataError(f"{code}: {field} references unknown categories {unknown}")
    return tags


def parse_regulation(entry: Mapping[str, Any]) -> CountryRegulation:
    """Build a :class:`CountryRegulation` from one snapshot entry."""

    code = normalize_country_code(entry.get("code", ""))
    if not code:
        raise RegulationDataError("Regulation entry is missing a country code")
    name = str(entry.get("name") or code)
    rates = entry.get("tax_rates") or {}
    if not isinstance(rates, Mapping):
        raise RegulationDataError(f"{code}: tax_rates must be an object")

    return CountryRegulation(
        code=code,
        name=name,
        export_restrictions=tuple(str(k).lower() for k in entry.get("export_restrictions", [])),
        import_restrictions=tuple(str(k).lower() for k in entry.get("import_restrictions", [])),
        prohibited_item_categories=_categories(
            entry.get("prohibited_item_categories", []), "prohibited_item_categories", code
        ),
        restricted_item_categories=_categories(
            entry.get("restricted_item_categories", []), "restricted_item_categories", code
        ),
        requires_pre_inspection=bool(entry.get("requires_pre_inspection", False)),
        certificate_types=tuple(str(c) for c in entry.get("certificate_types", [])),
        tax_rates=TaxRates(
            export=_percentage(rates.get("export"), "tax_rates.export", code),
            import_=_percentage(rates.get("import"), "tax_rates.import", code),
            duty=_percentage(rates.get("duty"), "tax_rates.duty", code),
        ),
        cfr_multiplier=_fraction(entry.get("cfr_multiplier", 0.0), "cfr_multiplier", code),
        x_work_multiplier=_fraction(entry.get("x_work_multiplier", 0.0), "x_work_multiplier", code),
    )


def _load_snapshot(path: SnapshotSource) -> tuple[str, tuple[CountryRegulation, ...]]:
    if not path.is_file():
        raise RegulationDataError(f"Regulation snapshot not found at {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RegulationDataError(f"Regulation snapshot {path} is not valid JSON: {exc}") from exc

    raw = payload.get("countries", []) if isinstance(payload, dict) else None
    if not isinstance(raw, list):
        raise RegulationDataError(f"Regulation snapshot {path} must hold a 'countries' list")

    regulations: list[CountryRegulation] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, dict):
            raise RegulationDataError(f"Regulation snapshot {path} has a non-object entry")
        regulation = parse_regulation(entry)
        if regulation.code in seen:
            raise RegulationDataError(f"Duplicate regulation entry for {regulation.code}")
        seen.add(regulation.code)
        regulations.append(regulation)
    snapshot = str(payload.get("snapshot", ""))
    logger.info(
        "Loaded %d regulation profiles (snapshot %s) from %s", len(regulations), snapshot or "-", path
    )
    return snapshot, tuple(regulations)


class CountryRegulationRegistry:
    """Read-only table of country regulation profiles, in snapshot order.

    Order matters: the country resolver returns the first entry whose code
    or name appears in an address.
    """

    def __init__(
        self,
        data_path: str | Path | None = None,
        *,
        regulations: Iterable[CountryRegulation] | None = None,
    ) -> None:
        if regulations is not None:
            self._snapshot = ""
            entries = tuple(regulations)
        else:
            path = Path(data_path) if data_path else default_snapshot_source()
            self._snapshot, entries = _load_snapshot(path)
        self._by_code = MappingProxyType({entry.code: entry for entry in entries})
        self._entries = tuple(self._by_code.values())

    @property
    def snapshot(self) -> str:
        return self._snapshot

    @property
    def regulations(self) -> tuple[CountryRegulation, ...]:
        return self._entries

    def codes(self) -> tuple[str, ...]:
        return tuple(self._by_code)

    def get(self, code: str | None) -> CountryRegulation | None:
        if not code:
            return None
        return self._by_code.get(normalize_country_code(code))

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_country_code(code) in self._by_code

    def __iter__(self) -> Iterator[CountryRegulation]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@lru_cache(maxsize=1)
def get_regulation_registry(data_path: str | None = None) -> CountryRegulationRegistry:
    """Return a cached CountryRegulationRegistry instance."""
    return CountryRegulationRegistry(data_path)
