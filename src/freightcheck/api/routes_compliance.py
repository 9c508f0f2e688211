from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from freightcheck.api.security import require_api_key
from freightcheck.compliance.evaluator import get_evaluator
from freightcheck.compliance.models import (
    ComplianceCheckInput,
    ComplianceCheckResult,
    CountryRegulationModel,
    CountrySummaryModel,
)
from freightcheck.compliance.regulations import get_regulation_registry
from freightcheck.observability import log_event

router = APIRouter(
    prefix="/api/compliance",
    tags=["compliance"],
    dependencies=[Depends(require_api_key)],
)


@router.post("/check", response_model=ComplianceCheckResult)
def check_compliance(request: ComplianceCheckInput) -> ComplianceCheckResult:
    """Evaluate a shipment for prohibited goods, required documents and landed cost."""

    result = get_evaluator().evaluate(request)
    log_event(
        "compliance.check",
        origin=result.origin_country,
        destination=result.destination_country,
        scope=result.shipment_scope,
        errors=len(result.errors),
        warnings=len(result.warnings),
    )
    return result


@router.get("/countries", response_model=List[CountrySummaryModel])
def list_countries() -> List[CountrySummaryModel]:
    return [
        CountrySummaryModel(
            code=regulation.code,
            name=regulation.name,
            requires_pre_inspection=regulation.requires_pre_inspection,
            certificate_types=list(regulation.certificate_types),
        )
        for regulation in get_regulation_registry()
    ]


@router.get("/countries/{code}", response_model=CountryRegulationModel)
def get_country(code: str) -> CountryRegulationModel:
    regulation = get_regulation_registry().get(code)
    if regulation is None:
        raise HTTPException(
            status_code=404,
            detail={"message": "Unknown country code", "code": code.strip().upper()},
        )
    return CountryRegulationModel.model_validate(regulation.to_dict())

