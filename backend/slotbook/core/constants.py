# backend/slotbook/core/constants.py
"""Shared constants for the booking slot engine."""

from datetime import time

BRAND_NAME = "Slotbook"

# Checkout holds
SLOT_LOCK_TTL_MINUTES = 15

# Defaults used by the order/checkout layer when it does not pass its own values
DEFAULT_SLOT_DURATION_MINUTES = 60
DEFAULT_SLOT_INTERVAL_MINUTES = 30
DEFAULT_SLOT_GRID_INTERVAL_MINUTES = 60

# Missing block bounds cover the whole day
DAY_START = time(0, 0)
DAY_END = time(23, 59)

MIN_DAY_OF_WEEK = 0  # Sunday
MAX_DAY_OF_WEEK = 6  # Saturday

ERROR_SLOT_UNAVAILABLE = "Slot is not available or already locked"
ERROR_BLOCK_NOT_FOUND = "Block not found or access denied"
