"""Compliance evaluation for a single shipment.

One synchronous pass per call:

  resolve countries -> domestic fast path | international full path -> report

The domestic path only screens for goods that may never be shipped (drugs,
weapons, explosives) and charges nothing. The international path combines the
item classification with the origin's export rules and the destination's
import rules, collects the documents to prepare and estimates landed cost.
Business-data gaps (unknown country, empty description, zero value) never
raise; they fall back to the conservative international path with default
cost multipliers. Value and weight advisories apply to both paths.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Mapping

from freightcheck.compliance.country_resolver import CountryResolver
from freightcheck.compliance.item_classifier import ItemClassifier
from freightcheck.compliance.landed_cost import compute_landed_cost
from freightcheck.compliance.models import ComplianceCheckInput, ComplianceCheckResult
from freightcheck.compliance.regulations import (
    CountryRegulation,
    CountryRegulationRegistry,
    get_regulation_registry,
)
from freightcheck.compliance.report import ComplianceFindings, ReportAssembler

logger = logging.getLogger(__name__)

HIGH_VALUE_THRESHOLD = 5000.0
HEAVY_WEIGHT_THRESHOLD_KG = 30.0

HS_CODE_WARNING = "HS Code is required for international shipments. Please generate one."
HIGH_VALUE_WARNING = "High value shipment - additional insurance recommended"
HEAVY_SHIPMENT_WARNING = "Heavy shipment - special handling may be required"


def is_domestic_route(origin_code: str | None, destination_code: str | None) -> bool:
    """Same resolved country on both ends. Two unknowns are not provably domestic."""
    return origin_code is not None and origin_code == destination_code


def _present_keywords(keywords: tuple[str, ...], description: str) -> list[str]:
    return [keyword for keyword in keywords if keyword in description]


class ComplianceEvaluator:
    """Evaluates shipments against the regulation registry.

    Instances hold only read-only collaborators and can be shared across
    threads.
    """

    def __init__(
        self,
        registry: CountryRegulationRegistry | None = None,
        *,
        resolver: CountryResolver | None = None,
        classifier: ItemClassifier | None = None,
        assembler: ReportAssembler | None = None,
    ) -> None:
        self._registry = registry if registry is not None else get_regulation_registry()
        self._resolver = resolver or CountryResolver(self._registry)
        self._classifier = classifier or ItemClassifier()
        self._assembler = assembler or ReportAssembler()

    @property
    def registry(self) -> CountryRegulationRegistry:
        return self._registry

    def evaluate(self, request: ComplianceCheckInput | Mapping[str, Any]) -> ComplianceCheckResult:
        if not isinstance(request, ComplianceCheckInput):
            request = ComplianceCheckInput.model_validate(request)

        origin_code = self._resolver.resolve(request.origin_address)
        destination_code = self._resolver.resolve(request.destination_address)
        domestic = is_domestic_route(origin_code, destination_code)
        logger.debug(
            "Compliance route %s -> %s (%s)",
            origin_code or "?",
            destination_code or "?",
            "domestic" if domestic else "international",
        )

        findings = ComplianceFindings()
        if domestic:
            self._check_domestic(request, findings)
        else:
            self._check_international(
                request,
                findings,
                origin=self._registry.get(origin_code),
                destination=self._registry.get(destination_code),
                both_resolved=origin_code is not None and destination_code is not None,
            )
        self._check_thresholds(request, findings)

        return self._assembler.assemble(
            request,
            findings,
            origin_code=origin_code,
            destination_code=destination_code,
            domestic=domestic,
        )

    def _check_domestic(self, request: ComplianceCheckInput, findings: ComplianceFindings) -> None:
        classification = self._classifier.classify_critical(request.item_description)
        if classification.is_clean:
            return
        for category in classification.prohibited:
            findings.prohibited_items.append(category)
            findings.errors.append(f"{category} cannot be shipped domestically")

    def _check_international(
        self,
        request: ComplianceCheckInput,
        findings: ComplianceFindings,
        *,
        origin: CountryRegulation | None,
        destination: CountryRegulation | None,
        both_resolved: bool,
    ) -> None:
        description = (request.item_description or "").lower()
        classification = self._classifier.classify(description)
        findings.prohibited_items.extend(classification.prohibited)
        findings.restricted_items.extend(classification.restricted)

        if origin is not None:
            findings.export_restrictions.extend(
                _present_keywords(origin.export_restrictions, description)
            )
            for category in classification.prohibited:
                if category in origin.prohibited_item_categories:
                    findings.errors.append(f"{category} is prohibited for export from {origin.name}")

        if destination is not None:
            findings.import_restrictions.extend(
                _present_keywords(destination.import_restrictions, description)
            )
            for category in classification.prohibited:
                if category in destination.prohibited_item_categories:
                    findings.errors.append(
                        f"{category} is prohibited for import into {destination.name}"
                    )
            for category in classification.restricted:
                if category in destination.restricted_item_categories:
                    findings.warnings.append(
                        f"{category} requires special documentation for import into {destination.name}"
                    )
                    findings.required_documents.append(f"{category} import permit")
            if destination.requires_pre_inspection and destination.certificate_types:
                findings.required_documents.extend(
                    f"{scheme} Certificate" for scheme in destination.certificate_types
                )
            findings.requires_pre_inspection = destination.requires_pre_inspection
            if destination.certificate_types:
                findings.certificate_type = destination.certificate_types[0]

        findings.costs = compute_landed_cost(request.value, origin, destination)

        if both_resolved and not (request.hs_code or "").strip():
            findings.warnings.append(HS_CODE_WARNING)

    @staticmethod
    def _check_thresholds(request: ComplianceCheckInput, findings: ComplianceFindings) -> None:
        """Value and weight advisories, raised for every route."""
        if request.value > HIGH_VALUE_THRESHOLD:
            findings.warnings.append(HIGH_VALUE_WARNING)
        if request.weight > HEAVY_WEIGHT_THRESHOLD_KG:
            findings.warnings.append(HEAVY_SHIPMENT_WARNING)


@lru_cache(maxsize=1)
def get_evaluator() -> ComplianceEvaluator:
    """Return a cached evaluator over the default registry."""
    return ComplianceEvaluator()


def evaluate(request: ComplianceCheckInput | Mapping[str, Any]) -> ComplianceCheckResult:
    """Evaluate ``request`` with the default evaluator."""
    return get_evaluator().evaluate(request)
