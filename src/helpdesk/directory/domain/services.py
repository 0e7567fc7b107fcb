"""
Directory Domain Services
=========================
"""

import re
from typing import Iterable, List, Optional

from helpdesk.access.domain import AccessResolver
from helpdesk.directory.domain.entities import User

STAFF_ID_PREFIX = "EMP"
_STAFF_ID = re.compile(rf"^{STAFF_ID_PREFIX}(\d+)$")


def users_in_department(
    users: Iterable[User],
    department: Optional[str],
    resolver: AccessResolver,
) -> List[User]:
    """
    Users whose department resolves to the same policy key as ``department``.

    "IT Support" therefore finds the IT staff.
    """
    wanted = resolver.resolve_department(department)
    return [u for u in users if resolver.resolve_department(u.department) == wanted]


def next_staff_id(existing_ids: Iterable[str]) -> str:
    """One past the highest EMPnnn id, zero-padded to three digits."""
    numbers = [int(m.group(1)) for m in map(_STAFF_ID.match, existing_ids) if m]
    return f"{STAFF_ID_PREFIX}{max(numbers, default=0) + 1:03d}"
