"""
Staff Access Config — Public API
================================
"""

from staff_access.config.settings import AssignmentGlobalPolicy

__all__ = [
    "AssignmentGlobalPolicy",
]
