"""Final assembly of compliance results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from freightcheck.compliance.landed_cost import CostBreakdown
from freightcheck.compliance.models import (
    UNKNOWN_COUNTRY,
    ComplianceCheckInput,
    ComplianceCheckResult,
)


def dedupe(items: Iterable[str]) -> tuple[str, ...]:
    """Drop repeated entries, keeping first-occurrence order."""
    return tuple(dict.fromkeys(items))


@dataclass
class ComplianceFindings:
    """Mutable collector filled by one evaluation pass."""

    prohibited_items: list[str] = field(default_factory=list)
    restricted_items: list[str] = field(default_factory=list)
    export_restrictions: list[str] = field(default_factory=list)
    import_restrictions: list[str] = field(default_factory=list)
    required_documents: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    requires_pre_inspection: bool = False
    certificate_type: str | None = None
    costs: CostBreakdown = field(default_factory=CostBreakdown.zero)


class ReportAssembler:
    """Turns collected findings into a frozen :class:`ComplianceCheckResult`."""

    def assemble(
        self,
        request: ComplianceCheckInput,
        findings: ComplianceFindings,
        *,
        origin_code: str | None,
        destination_code: str | None,
        domestic: bool,
    ) -> ComplianceCheckResult:
        required_documents = dedupe(findings.required_documents)
        costs = findings.costs
        return ComplianceCheckResult(
            origin_country=origin_code or UNKNOWN_COUNTRY,
            destination_country=destination_code or UNKNOWN_COUNTRY,
            shipment_scope="domestic" if domestic else "international",
            item_description=request.item_description,
            hs_code=request.hs_code,
            weight=request.weight,
            value=request.value,
            requires_pre_inspection=findings.requires_pre_inspection,
            requires_certificate=bool(required_documents),
            certificate_type=findings.certificate_type,
            prohibited_items=dedupe(findings.prohibited_items),
            restricted_items=dedupe(findings.restricted_items),
            export_restrictions=dedupe(findings.export_restrictions),
            import_restrictions=dedupe(findings.import_restrictions),
            required_documents=required_documents,
            warnings=dedupe(findings.warnings),
            errors=dedupe(findings.errors),
            export_tax_rate=costs.export_tax_rate,
            import_tax_rate=costs.import_tax_rate,
            import_duty_rate=costs.import_duty_rate,
            export_tax=costs.export_tax,
            import_tax=costs.import_tax,
            import_duty=costs.import_duty,
            cfr_cost=costs.cfr_cost,
            x_work_cost=costs.x_work_cost,
            total_additional_costs=costs.total,
        )
