"""
Access Application Services
===========================

Wraps the pure resolver for use by controllers and other modules.

Other bounded contexts call ``AccessService.require`` before acting, so the
resolver itself stays free of exceptions.
"""

from typing import Optional

from helpdesk.access.application.dto import (
    AccessCheckResponse,
    NavigationResponse,
    PageAccessResponse,
)
from helpdesk.access.domain import (
    PAGE_MODULES,
    AccessResolver,
    PermissionLevel,
    page_redirect,
    visible_pages,
)
from helpdesk.access.domain.services import page_name
from helpdesk.core import AccessDeniedException, ValidationException
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class AccessService:
    """Permission checks, navigation and page gating for a caller department."""

    def __init__(self, resolver: AccessResolver):
        self._resolver = resolver

    @property
    def resolver(self) -> AccessResolver:
        return self._resolver

    def check(
        self,
        department: Optional[str],
        module: str,
        required: PermissionLevel = PermissionLevel.READ,
    ) -> AccessCheckResponse:
        required_level = PermissionLevel.lookup(required)
        if required_level is None:
            raise ValidationException(f"Unknown permission level: {required!r}", {"field": "level"})
        return AccessCheckResponse(
            department=department,
            department_key=self._resolver.resolve_department(department),
            module=module,
            required_level=required_level.value,
            granted_level=self._resolver.granted_level(department, module).value,
            allowed=self._resolver.has_access(department, module, required_level),
        )

    def require(
        self,
        department: Optional[str],
        module: str,
        required: PermissionLevel = PermissionLevel.READ,
    ) -> None:
        """Raise AccessDeniedException unless the department passes."""
        if self._resolver.has_access(department, module, required):
            return

        logger.info(
            "Access denied",
            extra={
                "department": department,
                "department_key": self._resolver.resolve_department(department),
                "module": module,
                "required_level": _level_name(required),
            }
        )
        raise AccessDeniedException(module, _level_name(required), department)

    def navigation(self, department: Optional[str]) -> NavigationResponse:
        return NavigationResponse(
            department=department,
            department_key=self._resolver.resolve_department(department),
            is_super_admin=self._resolver.is_super_admin(department),
            pages=visible_pages(self._resolver, department),
            modules=self._resolver.allowed_modules(department),
        )

    def page_access(self, department: Optional[str], page: str) -> PageAccessResponse:
        redirect = page_redirect(self._resolver, department, page)
        return PageAccessResponse(
            page=page_name(page),
            module=PAGE_MODULES.get(page_name(page)),
            allowed=redirect is None,
            redirect_to=redirect,
        )


def _level_name(level) -> str:
    return level.value if isinstance(level, PermissionLevel) else str(level)
