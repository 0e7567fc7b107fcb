"""
Access Value Objects
====================

Immutable value objects for department-based access control.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional


class PermissionLevel(str, Enum):
    """
    Ordered permission levels.

    ``none < limited < read < user < owner < full``; comparison operators
    compare by rank, not by string value.
    """
    NONE = "none"
    LIMITED = "limited"
    READ = "read"
    USER = "user"
    OWNER = "owner"
    FULL = "full"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "PermissionLevel":
        """Parse a granted level name, mapping anything unrecognised to NONE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NONE

    @classmethod
    def lookup(cls, value) -> Optional["PermissionLevel"]:
        """Strict parse for a required level; unrecognised names give None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    def satisfies(self, required: "PermissionLevel") -> bool:
        return self.rank >= required.rank

    def __lt__(self, other):
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {level: index for index, level in enumerate(PermissionLevel)}


class Module(str, Enum):
    """Capability areas of the application."""
    TICKETING = "ticketing"
    FINANCE = "finance"
    AUDIT = "audit"
    REPORTING = "reporting"
    CONFIG = "config"
    INVENTORY = "inventory"
    PURCHASES = "purchases"
    USERS = "users"
    ADMIN = "admin"
    IAM = "iam"
    PAM = "pam"
    SECURITY_INCIDENT = "security-incident"
    VULNERABILITY = "vulnerability"
    POLICY_COMPLIANCE = "policy-compliance"
    SECURITY_DASHBOARD = "security-dashboard"
    DATA_INTEGRATION = "data-integration"
    DATA_WAREHOUSE = "data-warehouse"
    ANALYTICS_BI = "analytics-bi"
    DATA_GOVERNANCE = "data-governance"
    LEAVE_MANAGEMENT = "leave-management"
    PASSWORD_RESET = "password-reset"


RESTRICTED_MODULES = frozenset({Module.USERS.value, Module.ADMIN.value, Module.PURCHASES.value})


@dataclass(frozen=True)
class DepartmentRule:
    """One alias rule: if ``matches(lowercased_name)`` the key is ``department_key``."""
    name: str
    department_key: str
    matches: Callable[[str], bool] = field(compare=False)


def _freeze(table: Mapping[str, Mapping[str, object]]) -> Mapping[str, Mapping[str, PermissionLevel]]:
    return MappingProxyType({
        dept: MappingProxyType({
            module: PermissionLevel.parse(level) for module, level in modules.items()
        })
        for dept, modules in table.items()
    })


class AccessPolicy:
    """
    Department x module -> permission level table.

    Read-only after construction. Missing departments or modules resolve
    to ``PermissionLevel.NONE``.
    """

    def __init__(
        self,
        table: Mapping[str, Mapping[str, object]],
        super_admin_key: str = "admin",
        restricted_allow_list: tuple = ("admin", "IT", "IT / ICT"),
        restricted_modules: frozenset = RESTRICTED_MODULES,
    ):
        self._table = _freeze(table)
        self.super_admin_key = super_admin_key
        self.restricted_allow_list = frozenset(restricted_allow_list)
        self.restricted_modules = frozenset(restricted_modules)

    @property
    def departments(self) -> tuple:
        return tuple(self._table.keys())

    def knows(self, department_key: str) -> bool:
        return department_key in self._table

    def level_for(self, department_key: str, module: str) -> PermissionLevel:
        return self._table.get(department_key, {}).get(module, PermissionLevel.NONE)

    def is_restricted(self, module: str) -> bool:
        return module in self.restricted_modules

    def __repr__(self) -> str:
        return f"AccessPolicy(departments={list(self._table)})"
