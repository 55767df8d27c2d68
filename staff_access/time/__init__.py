"""
Staff Access Time — Public API
==============================
"""

from staff_access.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    set_default_clock,
)

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "get_default_clock",
    "set_default_clock",
]
