"""
Access Domain Layer
===================

Domain layer for department-based access control.

Contains:
- Value Objects: PermissionLevel (ordered), Module, AccessPolicy, DepartmentRule
- Domain Services: DepartmentResolver, AccessResolver, page gating helpers

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from helpdesk.access.domain.value_objects import (
    AccessPolicy,
    DepartmentRule,
    Module,
    PermissionLevel,
    RESTRICTED_MODULES,
)
from helpdesk.access.domain.services import (
    AccessResolver,
    DepartmentResolver,
    DENIED_PAGE_REDIRECT,
    PAGE_MODULES,
    UNSET_DEPARTMENT,
    can_view_page,
    default_department_rules,
    page_redirect,
    visible_pages,
)

__all__ = [
    # Value Objects
    "AccessPolicy",
    "DepartmentRule",
    "Module",
    "PermissionLevel",
    "RESTRICTED_MODULES",
    # Services
    "AccessResolver",
    "DepartmentResolver",
    "DENIED_PAGE_REDIRECT",
    "PAGE_MODULES",
    "UNSET_DEPARTMENT",
    "can_view_page",
    "default_department_rules",
    "page_redirect",
    "visible_pages",
]
