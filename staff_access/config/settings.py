"""
Staff Access Config — Assignment Settings
=========================================
Process-wide workflow assignment policy. It is read from the business
settings document owned by the surrounding application; this library
never persists it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

# Settings document keys. The first key of each pair is canonical.
ALLOW_MULTIPLE_KEYS = ("allowMultipleAssigneesPerRole", "allowMultipleAssigneesPerWorkflowRole")
ENFORCE_UNIQUE_KEYS = ("enforceUniqueSigners",)


@dataclass(frozen=True)
class AssignmentGlobalPolicy:
    """
    Workflow assignment rules.

    allow_multiple_assignees_per_role: several staff may hold one role.
    enforce_unique_signers: one person may not hold two stages of a chain.
    """

    allow_multiple_assignees_per_role: bool = False
    enforce_unique_signers: bool = True

    def __post_init__(self) -> None:
        for name in ("allow_multiple_assignees_per_role", "enforce_unique_signers"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a bool.")

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]]) -> AssignmentGlobalPolicy:
        """Read from a settings document; missing keys take the defaults."""
        settings = settings or {}
        defaults = cls()
        return cls(
            allow_multiple_assignees_per_role=_first(
                settings, ALLOW_MULTIPLE_KEYS, defaults.allow_multiple_assignees_per_role
            ),
            enforce_unique_signers=_first(
                settings, ENFORCE_UNIQUE_KEYS, defaults.enforce_unique_signers
            ),
        )

    def to_dict(self) -> dict:
        return {
            ALLOW_MULTIPLE_KEYS[0]: self.allow_multiple_assignees_per_role,
            ENFORCE_UNIQUE_KEYS[0]: self.enforce_unique_signers,
        }

    def with_changes(self, **changes) -> AssignmentGlobalPolicy:
        return replace(self, **changes)


def _first(settings: Mapping[str, Any], keys, default: bool):
    for key in keys:
        if key in settings and settings[key] is not None:
            return settings[key]
    return default
