"""
Access Policy Provider
======================

Loads the department access policy.

The built-in table mirrors the bank's department roles. A YAML file with
the same shape can replace it at startup:

    departments:
      Finance:
        ticketing: user
        finance: owner
    super_admin: admin
    restricted_allow_list: [admin, IT, IT / ICT]
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from helpdesk.access.domain import AccessPolicy, PermissionLevel
from helpdesk.core import ConfigurationException
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


_IT_ROLES = {
    "ticketing": "owner", "finance": "none", "audit": "none", "reporting": "full",
    "config": "full", "inventory": "owner", "purchases": "none", "users": "full",
    "leave-management": "user", "password-reset": "owner",
}

_NO_BACK_OFFICE = {"config": "none", "inventory": "none", "purchases": "none"}

DEFAULT_POLICY_TABLE: Dict[str, Dict[str, str]] = {
    "IT": dict(_IT_ROLES),
    "IT / ICT": dict(_IT_ROLES),
    "Finance": {
        "ticketing": "user", "finance": "owner", "audit": "none", "reporting": "full",
        **_NO_BACK_OFFICE, "leave-management": "user",
    },
    "Operations": {
        "ticketing": "user", "finance": "none", "audit": "none", "reporting": "full",
        **_NO_BACK_OFFICE, "leave-management": "user",
    },
    "Risk & Compliance": {
        "ticketing": "read", "finance": "none", "audit": "owner", "reporting": "full",
        **_NO_BACK_OFFICE, "leave-management": "user",
    },
    "Internal Audit": {
        "ticketing": "read", "finance": "read", "audit": "full", "reporting": "full",
        **_NO_BACK_OFFICE, "leave-management": "user",
    },
    "Customer Service": {
        "ticketing": "user", "finance": "none", "audit": "none", "reporting": "limited",
        **_NO_BACK_OFFICE, "leave-management": "user",
    },
    "Management": {
        "ticketing": "read", "finance": "read", "audit": "read", "reporting": "full",
        **_NO_BACK_OFFICE, "leave-management": "owner",
    },
    "Security": {
        "ticketing": "read", "finance": "none", "audit": "read", "reporting": "full",
        **_NO_BACK_OFFICE,
        "iam": "owner", "pam": "owner", "security-incident": "owner", "vulnerability": "owner",
        "policy-compliance": "owner", "security-dashboard": "full", "leave-management": "user",
    },
    "Data Analysis": {
        "ticketing": "read", "finance": "read", "audit": "read", "reporting": "full",
        **_NO_BACK_OFFICE,
        "data-integration": "owner", "data-warehouse": "owner", "analytics-bi": "owner",
        "data-governance": "owner", "leave-management": "user",
    },
    "Customer": {"ticketing": "user"},
    "admin": {
        "ticketing": "owner", "finance": "owner", "audit": "full", "reporting": "full",
        "config": "full", "inventory": "full", "purchases": "full",
        "leave-management": "owner", "password-reset": "owner",
    },
}


class AccessPolicyConfig(BaseModel):
    """Validated shape of an access policy file."""
    departments: Dict[str, Dict[str, str]] = Field(default_factory=lambda: DEFAULT_POLICY_TABLE)
    super_admin: str = Field(default="admin")
    restricted_allow_list: List[str] = Field(default_factory=lambda: ["admin", "IT", "IT / ICT"])

    @field_validator("departments")
    @classmethod
    def validate_levels(cls, v: Dict[str, Dict[str, str]]) -> Dict[str, Dict[str, str]]:
        """Reject level names outside the ordered set."""
        known = {level.value for level in PermissionLevel}
        for dept, modules in v.items():
            for module, level in modules.items():
                if str(level).lower() not in known:
                    raise ValueError(f"{dept}.{module}: unknown permission level '{level}'")
        return v

    def to_policy(self) -> AccessPolicy:
        return AccessPolicy(
            self.departments,
            super_admin_key=self.super_admin,
            restricted_allow_list=tuple(self.restricted_allow_list),
        )


def default_policy() -> AccessPolicy:
    return AccessPolicyConfig().to_policy()


class YAMLPolicyProvider:
    """
    Access policy provider that loads from YAML once.

    Falls back to the built-in table when no path is configured or the
    file does not exist. A malformed file is a startup error.
    """

    def __init__(self, policy_path: Optional[Path] = None):
        self._policy_path = Path(policy_path) if policy_path else None
        self._policy = self._load_policy()

    def _load_policy(self) -> AccessPolicy:
        if self._policy_path is None:
            return default_policy()

        if not self._policy_path.exists():
            logger.warning(
                "Access policy file not found, using built-in policy",
                extra={"path": str(self._policy_path)}
            )
            return default_policy()

        with open(self._policy_path, "r") as f:
            data = yaml.safe_load(f) or {}

        try:
            config = AccessPolicyConfig(**data)
        except ValidationError as e:
            raise ConfigurationException(
                f"Invalid access policy file {self._policy_path}",
                {"errors": str(e)}
            ) from e

        logger.info(
            "Access policy loaded",
            extra={"path": str(self._policy_path), "departments": len(config.departments)}
        )
        return config.to_policy()

    def get_policy(self) -> AccessPolicy:
        """Get the loaded access policy."""
        return self._policy
