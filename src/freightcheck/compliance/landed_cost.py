"""Landed-cost estimate.

Computes the five additive components charged on top of the declared value:

  export_tax + import_tax + import_duty + cfr_cost + x_work_cost

Tax and duty rates are percentages taken from the origin (export) and
destination (import, duty) profiles. CFR and Ex-Works are flat fractions of
the declared value; when the destination is unknown the engine-wide defaults
apply so an estimate is always produced.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from freightcheck.compliance.regulations import CountryRegulation

DEFAULT_CFR_MULTIPLIER = 0.12
DEFAULT_X_WORK_MULTIPLIER = 0.06


@dataclass(frozen=True)
class CostBreakdown:
    """Rates used and amounts charged for one shipment."""

    export_tax_rate: float
    import_tax_rate: float
    import_duty_rate: float
    cfr_multiplier: float
    x_work_multiplier: float

    export_tax: float
    import_tax: float
    import_duty: float
    cfr_cost: float
    x_work_cost: float

    @property
    def total(self) -> float:
        return self.export_tax + self.import_tax + self.import_duty + self.cfr_cost + self.x_work_cost

    @classmethod
    def zero(cls) -> "CostBreakdown":
        return cls(
            export_tax_rate=0.0,
            import_tax_rate=0.0,
            import_duty_rate=0.0,
            cfr_multiplier=0.0,
            x_work_multiplier=0.0,
            export_tax=0.0,
            import_tax=0.0,
            import_duty=0.0,
            cfr_cost=0.0,
            x_work_cost=0.0,
        )


def _clamp_value(value: float | int | None) -> float:
    if value is None:
        return 0.0
    value = float(value)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def compute_landed_cost(
    value: float | int | None,
    origin: CountryRegulation | None = None,
    destination: CountryRegulation | None = None,
) -> CostBreakdown:
    """Compute the cost breakdown for ``value``.

    Parameters
    ----------
    value:
        Declared shipment value. Negative or non-finite values count as 0.
    origin:
        Export-side profile; only its export tax rate is used.
    destination:
        Import-side profile supplying import tax, duty and the CFR / Ex-Works
        multipliers.
    """
    base = _clamp_value(value)

    export_rate = origin.tax_rates.export if origin else 0.0
    import_rate = destination.tax_rates.import_ if destination else 0.0
    duty_rate = destination.tax_rates.duty if destination else 0.0
    # A zero multiplier in the data falls back to the default as well.
    cfr_multiplier = (destination.cfr_multiplier if destination else 0.0) or DEFAULT_CFR_MULTIPLIER
    x_work_multiplier = (
        destination.x_work_multiplier if destination else 0.0
    ) or DEFAULT_X_WORK_MULTIPLIER

    return CostBreakdown(
        export_tax_rate=export_rate,
        import_tax_rate=import_rate,
        import_duty_rate=duty_rate,
        cfr_multiplier=cfr_multiplier,
        x_work_multiplier=x_work_multiplier,
        export_tax=base * export_rate / 100.0,
        import_tax=base * import_rate / 100.0,
        import_duty=base * duty_rate / 100.0,
        cfr_cost=base * cfr_multiplier,
        x_work_cost=base * x_work_multiplier,
    )
