"""
Access Domain Services
======================

Stateless resolution of departments and permissions.

Pure functions over an injected ``AccessPolicy``: no I/O, no ambient
session state, and no exceptions for unknown input. Anything unrecognised
fails closed to ``PermissionLevel.NONE``.
"""

from typing import Dict, List, Optional, Sequence

from helpdesk.access.domain.value_objects import (
    AccessPolicy,
    DepartmentRule,
    Module,
    PermissionLevel,
)

UNSET_DEPARTMENT = "none"


def default_department_rules() -> tuple:
    """
    Alias rules in evaluation order; the first match wins.

    "it" is checked first, so any name containing those two letters
    (e.g. "Security") resolves to IT unless it is an exact policy key.
    """
    return (
        DepartmentRule("it", "IT", lambda d: "it" in d),
        DepartmentRule("finance", "Finance", lambda d: "finance" in d),
        DepartmentRule("operations", "Operations", lambda d: "operations" in d),
        DepartmentRule("risk", "Risk & Compliance", lambda d: "risk" in d),
        DepartmentRule("audit", "Internal Audit", lambda d: "audit" in d),
        DepartmentRule(
            "customer-service",
            "Customer Service",
            lambda d: "branch" in d or "support" in d or "customer" in d,
        ),
        DepartmentRule("management", "Management", lambda d: "management" in d),
        DepartmentRule("security", "Security", lambda d: "security" in d),
        DepartmentRule("data-analysis", "Data Analysis", lambda d: "data" in d and "analysis" in d),
        DepartmentRule("admin", "admin", lambda d: d == "admin"),
    )


class DepartmentResolver:
    """Normalizes free-text department names to canonical policy keys."""

    def __init__(self, policy: AccessPolicy, rules: Optional[Sequence[DepartmentRule]] = None):
        self._policy = policy
        self._rules = tuple(rules) if rules is not None else default_department_rules()

    @property
    def rules(self) -> tuple:
        return self._rules

    def resolve(self, raw_department: Optional[str]) -> str:
        """
        Resolve a raw department string.

        Order: unset -> "none"; exact policy key; ordered keyword rules;
        otherwise the raw string unchanged (unknown, so no access anywhere).
        """
        if not raw_department:
            return UNSET_DEPARTMENT
        if self._policy.knows(raw_department):
            return raw_department

        lowered = raw_department.lower()
        for rule in self._rules:
            if rule.matches(lowered):
                return rule.department_key
        return raw_department


class AccessResolver:
    """
    Answers "can this department do X on module Y".

    The restricted modules (users, admin, purchases) bypass the table: only
    the super-admin and IT keys pass, whatever level is requested.
    """

    def __init__(self, policy: AccessPolicy, department_resolver: Optional[DepartmentResolver] = None):
        self._policy = policy
        self._departments = department_resolver or DepartmentResolver(policy)

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    def resolve_department(self, raw_department: Optional[str]) -> str:
        return self._departments.resolve(raw_department)

    def is_super_admin(self, raw_department: Optional[str]) -> bool:
        return self.resolve_department(raw_department) == self._policy.super_admin_key

    def level_for(self, raw_department: Optional[str], module: str) -> PermissionLevel:
        """Table level for the department; restricted modules are not special-cased here."""
        return self._policy.level_for(self.resolve_department(raw_department), _module_name(module))

    def has_access(
        self,
        raw_department: Optional[str],
        module: str,
        required: PermissionLevel = PermissionLevel.READ,
    ) -> bool:
        required_level = PermissionLevel.lookup(required)
        if required_level is None:
            return False

        key = self.resolve_department(raw_department)
        module_name = _module_name(module)

        if self._policy.is_restricted(module_name):
            return key in self._policy.restricted_allow_list

        return self._policy.level_for(key, module_name).satisfies(required_level)

    def granted_level(self, raw_department: Optional[str], module: str) -> PermissionLevel:
        """
        Level the department effectively holds on ``module``.

        Restricted modules report ``full`` for allow-listed departments and
        ``none`` for everyone else, matching ``has_access``.
        """
        module_name = _module_name(module)
        if self._policy.is_restricted(module_name):
            key = self.resolve_department(raw_department)
            if key in self._policy.restricted_allow_list:
                return PermissionLevel.FULL
            return PermissionLevel.NONE
        return self.level_for(raw_department, module_name)

    def allowed_modules(
        self,
        raw_department: Optional[str],
        required: PermissionLevel = PermissionLevel.READ,
    ) -> List[str]:
        """Every known module the department passes ``required`` on."""
        return [
            module.value for module in Module
            if self.has_access(raw_department, module.value, required)
        ]


def _module_name(module) -> str:
    return module.value if isinstance(module, Module) else str(module)


# ========== Page gating ==========

# Page -> module; pages mapped to None need no access check.
PAGE_MODULES: Dict[str, Optional[str]] = {
    "index.html": None,
    "system.html": None,
    "submit.html": Module.TICKETING.value,
    "tickets.html": Module.TICKETING.value,
    "finance.html": Module.FINANCE.value,
    "audit.html": Module.AUDIT.value,
    "notifications.html": Module.AUDIT.value,
    "reports.html": Module.REPORTING.value,
    "config.html": Module.CONFIG.value,
    "users.html": Module.USERS.value,
    "iam.html": Module.IAM.value,
    "pam.html": Module.PAM.value,
    "security-incident.html": Module.SECURITY_INCIDENT.value,
    "vulnerability.html": Module.VULNERABILITY.value,
    "policy-compliance.html": Module.POLICY_COMPLIANCE.value,
    "security-dashboard.html": Module.SECURITY_DASHBOARD.value,
    "data-integration.html": Module.DATA_INTEGRATION.value,
    "data-warehouse.html": Module.DATA_WAREHOUSE.value,
    "analytics-bi.html": Module.ANALYTICS_BI.value,
    "data-governance.html": Module.DATA_GOVERNANCE.value,
    "leave-management.html": Module.LEAVE_MANAGEMENT.value,
    "password-reset.html": Module.PASSWORD_RESET.value,
}

DENIED_PAGE_REDIRECT = "system.html"


def page_name(href: str) -> str:
    """Strip fragment, query and directories from a link target."""
    return href.split("#")[0].split("?")[0].rstrip("/").split("/")[-1]


def can_view_page(resolver: AccessResolver, raw_department: Optional[str], page: str) -> bool:
    module = PAGE_MODULES.get(page_name(page))
    if module is None:
        return True
    return resolver.has_access(raw_department, module, PermissionLevel.READ)


def page_redirect(resolver: AccessResolver, raw_department: Optional[str], page: str) -> Optional[str]:
    """Where to send a caller who opened ``page`` directly, or None if allowed."""
    if can_view_page(resolver, raw_department, page):
        return None
    return DENIED_PAGE_REDIRECT


def visible_pages(resolver: AccessResolver, raw_department: Optional[str]) -> List[str]:
    return [page for page in PAGE_MODULES if can_view_page(resolver, raw_department, page)]
