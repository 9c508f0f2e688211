"""Cross-border compliance checks and landed-cost estimates.

Typical use::

    from freightcheck.compliance import evaluate

    result = evaluate({
        "origin_address": "New York, US",
        "destination_address": "London, UK",
        "item_description": "cotton t-shirts",
        "weight": 10,
        "value": 1000,
    })
"""

from .country_resolver import COUNTRY_ALIASES, CountryResolver, resolve_country
from .evaluator import ComplianceEvaluator, evaluate, get_evaluator
from .item_classifier import ItemClassification, ItemClassifier
from .landed_cost import CostBreakdown, compute_landed_cost
from .models import ComplianceCheckInput, ComplianceCheckResult
from .regulations import (
    CountryRegulation,
    CountryRegulationRegistry,
    RegulationDataError,
    TaxRates,
    get_regulation_registry,
)
from .report import ReportAssembler

__all__ = [
    "COUNTRY_ALIASES",
    "ComplianceCheckInput",
    "ComplianceCheckResult",
    "ComplianceEvaluator",
    "CostBreakdown",
    "CountryRegulation",
    "CountryRegulationRegistry",
    "CountryResolver",
    "ItemClassification",
    "ItemClassifier",
    "RegulationDataError",
    "ReportAssembler",
    "TaxRates",
    "compute_landed_cost",
    "evaluate",
    "get_evaluator",
    "get_regulation_registry",
    "resolve_country",
]
