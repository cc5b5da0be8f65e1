"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_CHECKIN_CUTOFF = time(9, 0)

DEFAULT_TRANSPORT_RATE = Decimal("0.10")
DEFAULT_MEDICAL_RATE = Decimal("0.05")
DEFAULT_BONUS_FLAT = Decimal("0")
DEFAULT_TAX_RATE = Decimal("0.02")
DEFAULT_INSURANCE_RATE = Decimal("0.01")
DEFAULT_OTHER_FLAT = Decimal("0")

DEFAULT_LIST_LIMIT = 200
ADMIN_LIST_LIMIT = 500
