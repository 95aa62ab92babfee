"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_SESSION_TTL_MINUTES = 480
SESSION_TOKEN_BYTES = 32

MIN_PASSWORD_LENGTH = 6

MIN_PAYROLL_YEAR = 2000
MAX_PAYROLL_YEAR = 2100

MONEY_QUANT = Decimal("0.01")
# Largest value a DECIMAL(12, 2) column holds.
MAX_MONEY = Decimal("9999999999.99")
