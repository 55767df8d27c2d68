"""
Staff Access Permissions — Two-Level Permission Matrices
========================================================
A PermissionMatrix maps subject → module → action → bool, where the
subject is a Role (baseline layer) or a user id (override layer).

RULES:
- A cell is either an explicit bool or absent (None). Absence is never
  written as False: for the override layer absence means "defer to
  the role", for the role layer it reads as deny.
- No empty containers are stored. An empty row is the same as no row,
  so structural equality needs no normalization step.
- Every read that hands out a row returns a deep copy.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Hashable, Iterator, Mapping, Optional, TypeVar

from staff_access.identity.roster import Role
from staff_access.permissions.catalog import DEFAULT_CATALOG, ModuleKey, PermissionCatalog

S = TypeVar("S", bound=Hashable)

Row = Dict[ModuleKey, Dict[str, bool]]


def copy_row(row: Mapping[ModuleKey, Mapping[str, bool]]) -> Row:
    """Deep copy of a module → action → bool row, dropping empty modules."""
    return {
        module: dict(actions)
        for module, actions in row.items()
        if actions
    }


def _require_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"permission value must be bool, got {type(value).__name__}.")
    return value


class PermissionMatrix(Generic[S]):
    """Sparse subject → module → action → bool map."""

    def __init__(self, rows: Optional[Mapping[S, Mapping[ModuleKey, Mapping[str, bool]]]] = None):
        self._rows: Dict[S, Row] = {}
        for subject, row in (rows or {}).items():
            self.replace_row(subject, row)

    def get(self, subject: S, module: ModuleKey, action: str) -> Optional[bool]:
        return self._rows.get(subject, {}).get(module, {}).get(action)

    def set(self, subject: S, module: ModuleKey, action: str, value: bool) -> None:
        _require_bool(value)
        self._rows.setdefault(subject, {}).setdefault(module, {})[action] = value

    def clear(self, subject: S, module: ModuleKey, action: str) -> bool:
        """Remove one cell. Returns whether a value was present."""
        row = self._rows.get(subject)
        if row is None or action not in row.get(module, {}):
            return False
        del row[module][action]
        if not row[module]:
            del row[module]
        if not row:
            del self._rows[subject]
        return True

    def row(self, subject: S) -> Row:
        return copy_row(self._rows.get(subject, {}))

    def has_row(self, subject: S) -> bool:
        return subject in self._rows

    def replace_row(self, subject: S, row: Mapping[ModuleKey, Mapping[str, bool]]) -> None:
        copied = copy_row(row)
        for actions in copied.values():
            for value in actions.values():
                _require_bool(value)
        if copied:
            self._rows[subject] = copied
        else:
            self._rows.pop(subject, None)

    def drop_row(self, subject: S) -> bool:
        return self._rows.pop(subject, None) is not None

    def subjects(self) -> Iterator[S]:
        return iter(list(self._rows))

    def copy(self) -> PermissionMatrix[S]:
        return PermissionMatrix(self._rows)

    def to_dict(self, encode_subject=str) -> Dict[str, Dict[str, Dict[str, bool]]]:
        """Plain nested dict with deterministic (sorted) key order."""
        encoded = {
            encode_subject(subject): {
                module.value: dict(sorted(actions.items()))
                for module, actions in sorted(row.items(), key=lambda item: item[0].value)
            }
            for subject, row in self._rows.items()
        }
        return dict(sorted(encoded.items()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionMatrix):
            return NotImplemented
        return self._rows == other._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"PermissionMatrix({self._rows!r})"


# ══════════════════════════════════════════════════════════════
# APP PERMISSIONS DOCUMENT
# ══════════════════════════════════════════════════════════════

class AppPermissions:
    """
    The whole permissions document: role baselines plus user overrides.

    Loaded whole, edited in memory, written back whole.
    """

    def __init__(
        self,
        roles: Optional[PermissionMatrix[Role]] = None,
        users: Optional[PermissionMatrix[str]] = None,
    ):
        self.roles: PermissionMatrix[Role] = roles if roles is not None else PermissionMatrix()
        self.users: PermissionMatrix[str] = users if users is not None else PermissionMatrix()

    def copy(self) -> AppPermissions:
        return AppPermissions(roles=self.roles.copy(), users=self.users.copy())

    def to_dict(self) -> dict:
        return {
            "roles": self.roles.to_dict(encode_subject=lambda role: role.value),
            "users": self.users.to_dict(),
        }

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping[str, Any]],
        catalog: PermissionCatalog = DEFAULT_CATALOG,
    ) -> AppPermissions:
        """
        Build a document from its serialized form.

        Unknown roles, modules or actions raise UnknownCatalogEntry;
        non-bool cells raise TypeError. A fresh object is built, so a
        failed load leaves no partial state anywhere.
        """
        data = data or {}
        roles: PermissionMatrix[Role] = PermissionMatrix()
        for role_name, row in (data.get("roles") or {}).items():
            roles.replace_row(Role.parse(role_name), _parse_row(row, catalog))
        users: PermissionMatrix[str] = PermissionMatrix()
        for user_id, row in (data.get("users") or {}).items():
            users.replace_row(str(user_id), _parse_row(row, catalog))
        return cls(roles=roles, users=users)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppPermissions):
            return NotImplemented
        return self.roles == other.roles and self.users == other.users

    def __repr__(self) -> str:
        return f"AppPermissions(roles={self.roles!r}, users={self.users!r})"


def _parse_row(row: Mapping[str, Mapping[str, Any]], catalog: PermissionCatalog) -> Row:
    parsed: Row = {}
    for module_name, actions in (row or {}).items():
        for action_name, value in (actions or {}).items():
            module, action = catalog.require(module_name, action_name)
            parsed.setdefault(module, {})[action] = _require_bool(value)
    return parsed


def permissions_equal(a: AppPermissions, b: AppPermissions) -> bool:
    """Deterministic deep equality of two permission documents."""
    return a == b
