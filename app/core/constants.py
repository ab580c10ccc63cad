"""
Service-wide constants
"""
from decimal import Decimal

SERVICE_NAME = "staff-records-service"
DEFAULT_VERSION = "1.0.0"

# Salaries and bonuses are kept to the currency minor unit
MONEY_QUANTUM = Decimal("0.01")

# Separator between first and last name in display names
NAME_SEPARATOR = " "
