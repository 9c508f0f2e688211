from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_COUNTRY = "Unknown"


class ComplianceCheckInput(BaseModel):
    """Shipment facts supplied by a booking flow for one compliance check."""

    origin_address: str = Field(description="Trimmed origin address text")
    destination_address: str = Field(description="Trimmed destination address text")
    item_description: str = Field(default="", description="Free-text goods description")
    hs_code: Optional[str] = Field(default=None, description="Harmonized System code, if known")
    weight: float = Field(default=0.0, description="Gross weight in kg")
    value: float = Field(default=0.0, description="Declared value in the quote currency")
    service_type: Optional[str] = Field(
        default=None, description="Collection mode hint, e.g. 'pickup' or 'dropoff'"
    )

    model_config = ConfigDict(extra="forbid")


class ComplianceCheckResult(BaseModel):
    """Immutable outcome of a compliance and landed-cost evaluation.

    ``errors`` is the authoritative stop-booking signal; ``warnings``, required
    documents and certificate fields are advisory.
    """

    origin_country: str
    destination_country: str
    shipment_scope: Literal["domestic", "international"]

    item_description: str
    hs_code: Optional[str] = None
    weight: float
    value: float

    requires_pre_inspection: bool = False
    requires_certificate: bool = False
    certificate_type: Optional[str] = None

    prohibited_items: Tuple[str, ...] = ()
    restricted_items: Tuple[str, ...] = ()
    export_restrictions: Tuple[str, ...] = ()
    import_restrictions: Tuple[str, ...] = ()
    required_documents: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()

    export_tax_rate: float = 0.0
    import_tax_rate: float = 0.0
    import_duty_rate: float = 0.0
    export_tax: float = 0.0
    import_tax: float = 0.0
    import_duty: float = 0.0
    cfr_cost: float = 0.0
    x_work_cost: float = 0.0
    total_additional_costs: float = 0.0

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_blocked(self) -> bool:
        return bool(self.errors)

    @property
    def is_domestic(self) -> bool:
        return self.shipment_scope == "domestic"


class CountrySummaryModel(BaseModel):
    code: str
    name: str
    requires_pre_inspection: bool
    certificate_types: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class TaxRatesModel(BaseModel):
    export: float
    import_: float = Field(alias="import")
    duty: float

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class CountryRegulationModel(BaseModel):
    """Full regulation profile as exposed over the API."""

    code: str
    name: str
    export_restrictions: List[str]
    import_restrictions: List[str]
    prohibited_item_categories: List[str]
    restricted_item_categories: List[str]
    requires_pre_inspection: bool
    certificate_types: List[str]
    tax_rates: TaxRatesModel
    cfr_multiplier: float
    x_work_multiplier: float

    model_config = ConfigDict(extra="forbid")

