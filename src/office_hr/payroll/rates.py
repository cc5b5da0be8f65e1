from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping

from ..common.validators import to_decimal
from ..core import constants


@dataclass(frozen=True)
class PayrollRates:
    """Allowance/deduction schedule. Rates apply to the nominal basic salary."""

    transport_rate: Decimal = constants.DEFAULT_TRANSPORT_RATE
    medical_rate: Decimal = constants.DEFAULT_MEDICAL_RATE
    bonus_flat: Decimal = constants.DEFAULT_BONUS_FLAT
    tax_rate: Decimal = constants.DEFAULT_TAX_RATE
    insurance_rate: Decimal = constants.DEFAULT_INSURANCE_RATE
    other_flat: Decimal = constants.DEFAULT_OTHER_FLAT

    @classmethod
    def from_mapping(cls, values: Mapping[str, object] | None) -> "PayrollRates":
        if not values:
            return cls()
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown payroll rate(s): {', '.join(sorted(unknown))}")
        return cls(**{k: to_decimal(v, k) for k, v in values.items()})
