"""Department resolution, permission checks and page gating."""

import pytest

from helpdesk.access.application import AccessService
from helpdesk.access.domain import (
    AccessPolicy,
    AccessResolver,
    DENIED_PAGE_REDIRECT,
    Module,
    PermissionLevel,
    can_view_page,
    page_redirect,
    visible_pages,
)
from helpdesk.access.infrastructure import default_policy
from helpdesk.core import AccessDeniedException, ValidationException


@pytest.fixture
def resolver() -> AccessResolver:
    return AccessResolver(default_policy())


LEVELS = list(PermissionLevel)


# =============================================================================
# Permission levels
# =============================================================================

def test_levels_are_ordered_by_rank():
    assert PermissionLevel.NONE < PermissionLevel.LIMITED < PermissionLevel.READ
    assert PermissionLevel.READ < PermissionLevel.USER < PermissionLevel.OWNER < PermissionLevel.FULL
    assert max(LEVELS) == PermissionLevel.FULL


def test_unknown_level_parses_to_none():
    assert PermissionLevel.parse("superuser") == PermissionLevel.NONE
    assert PermissionLevel.parse(None) == PermissionLevel.NONE
    assert PermissionLevel.parse(" Owner ") == PermissionLevel.OWNER


# =============================================================================
# Department resolution
# =============================================================================

@pytest.mark.parametrize("raw, expected", [
    (None, "none"),
    ("", "none"),
    ("Finance", "Finance"),
    ("IT / ICT", "IT / ICT"),
    ("Security", "Security"),
    ("finance dept", "Finance"),
    ("Branch Network", "Customer Service"),
    ("Customer Support", "Customer Service"),
    ("Senior Management", "Management"),
    ("Data & Analysis", "Data Analysis"),
    ("risk office", "Risk & Compliance"),
    ("Marketing", "Marketing"),
])
def test_department_resolution(resolver, raw, expected):
    assert resolver.resolve_department(raw) == expected


def test_keyword_rules_apply_in_order(resolver):
    # "it" is tested before "security", so only the exact key reaches Security.
    assert resolver.resolve_department("Security Team") == "IT"
    assert resolver.resolve_department("Security") == "Security"


@pytest.mark.parametrize("raw", ["Finance", "finance dept", "IT Support", "Branch", "Marketing", None])
def test_resolution_is_idempotent(resolver, raw):
    once = resolver.resolve_department(raw)
    assert resolver.resolve_department(once) == once


# =============================================================================
# has_access
# =============================================================================

def test_table_lookup(resolver):
    assert resolver.level_for("Finance", "finance") == PermissionLevel.OWNER
    assert resolver.has_access("Finance", "finance", PermissionLevel.OWNER)
    assert not resolver.has_access("Finance", "audit", PermissionLevel.READ)
    assert resolver.has_access("Customer Service", "ticketing", PermissionLevel.USER)
    assert not resolver.has_access("Customer Service", "ticketing", PermissionLevel.OWNER)


@pytest.mark.parametrize("department", ["Finance", "IT", "Internal Audit", "Management", "admin", "Customer"])
@pytest.mark.parametrize("module", ["ticketing", "finance", "audit", "reporting", "config", "inventory"])
def test_has_access_is_monotonic(resolver, department, module):
    granted = [resolver.has_access(department, module, level) for level in LEVELS]
    # Once denied at some level, every higher level is denied too.
    first_denied = granted.index(False) if False in granted else len(granted)
    assert all(granted[:first_denied])
    assert not any(granted[first_denied:])


@pytest.mark.parametrize("module", ["users", "admin", "purchases"])
def test_restricted_modules_use_the_allow_list(resolver, module):
    for department in ("admin", "IT", "IT / ICT", "it helpdesk"):
        assert resolver.has_access(department, module, PermissionLevel.FULL)
    for department in ("Finance", "Management", "Customer Service", None):
        assert not resolver.has_access(department, module, PermissionLevel.LIMITED)


def test_table_level_does_not_open_restricted_modules():
    policy = AccessPolicy({"Finance": {"purchases": "full"}})
    assert not AccessResolver(policy).has_access("Finance", "purchases")


@pytest.mark.parametrize("required", ["superuser", "", None, 3, "owner+"])
@pytest.mark.parametrize("department", ["Marketing", "Finance", "admin", "IT"])
def test_unrecognised_required_level_is_denied(resolver, department, required):
    assert not resolver.has_access(department, "ticketing", required)
    assert not resolver.has_access(department, "users", required)


def test_required_level_names_are_case_insensitive(resolver):
    assert resolver.has_access("Finance", "finance", " Owner ")
    assert not resolver.has_access("Finance", "finance", "FULL")


@pytest.mark.parametrize("department, expected", [
    ("admin", PermissionLevel.FULL),
    ("IT / ICT", PermissionLevel.FULL),
    ("Management", PermissionLevel.NONE),
    (None, PermissionLevel.NONE),
])
def test_granted_level_on_restricted_module_follows_allow_list(resolver, department, expected):
    assert resolver.granted_level(department, "users") == expected


def test_granted_level_on_table_module(resolver):
    assert resolver.granted_level("Internal Audit", "audit") == PermissionLevel.FULL
    assert resolver.granted_level("Marketing", "audit") == PermissionLevel.NONE


def test_access_check_rejects_unknown_required_level(resolver):
    with pytest.raises(ValidationException):
        AccessService(resolver).check("admin", "ticketing", "superuser")


def test_require_fails_closed_on_unknown_required_level(resolver):
    with pytest.raises(AccessDeniedException) as exc_info:
        AccessService(resolver).require("admin", "ticketing", "superuser")
    assert exc_info.value.required_level == "superuser"


@pytest.mark.parametrize("department", ["Marketing", "", None, "Legal & Secretarial"])
def test_unknown_department_has_no_access(resolver, department):
    for module in Module:
        assert not resolver.has_access(department, module.value, PermissionLevel.LIMITED)


def test_unknown_module_has_no_access(resolver):
    assert resolver.level_for("admin", "spaceship") == PermissionLevel.NONE
    assert not resolver.has_access("admin", "spaceship", PermissionLevel.LIMITED)


def test_super_admin(resolver):
    assert resolver.is_super_admin("admin")
    assert not resolver.is_super_admin("Admin Office")
    assert not resolver.is_super_admin("IT")


def test_allowed_modules_for_customer(resolver):
    assert resolver.allowed_modules("Customer") == ["ticketing"]


# =============================================================================
# Page gating
# =============================================================================

def test_public_pages_are_always_visible(resolver):
    assert can_view_page(resolver, None, "index.html")
    assert can_view_page(resolver, "Marketing", "system.html")


def test_page_redirect(resolver):
    assert page_redirect(resolver, "Finance", "finance.html") is None
    assert page_redirect(resolver, "Finance", "/app/config.html?tab=1#top") == DENIED_PAGE_REDIRECT
    assert page_redirect(resolver, "Finance", "users.html") == DENIED_PAGE_REDIRECT
    assert page_redirect(resolver, "IT", "users.html") is None


def test_visible_pages_for_security(resolver):
    pages = visible_pages(resolver, "Security")
    assert "security-dashboard.html" in pages
    assert "tickets.html" in pages
    assert "finance.html" not in pages
