"""Shared builders for compliance tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from freightcheck.compliance.regulations import CountryRegulation, TaxRates


def _regulation(**overrides: Any) -> CountryRegulation:
    fields: dict[str, Any] = {
        "code": "XA",
        "name": "Examplia",
        "export_restrictions": (),
        "import_restrictions": (),
        "prohibited_item_categories": frozenset(),
        "restricted_item_categories": frozenset(),
        "requires_pre_inspection": False,
        "certificate_types": (),
        "tax_rates": TaxRates(),
        "cfr_multiplier": 0.1,
        "x_work_multiplier": 0.05,
    }
    fields.update(overrides)
    return CountryRegulation(**fields)


@pytest.fixture()
def make_regulation() -> Callable[..., CountryRegulation]:
    return _regulation


@pytest.fixture()
def write_snapshot(tmp_path: Path) -> Callable[..., Path]:
    def _write(countries: list[dict[str, Any]], name: str = "country_regulations.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"snapshot": "test", "countries": countries}), encoding="utf-8")
        return path

    return _write
