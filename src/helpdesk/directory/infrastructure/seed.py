"""
Directory Seed Data
===================

The bank's initial staff list, inserted at startup into an empty
``users`` table.
"""

from typing import List, Tuple

from helpdesk.directory.application import IUserRepository
from helpdesk.directory.domain import LeaveBalances, User
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

EMAIL_DOMAIN = "maishabank.com"

_STAFF: List[Tuple[str, str, str]] = [
    ("EMP001", "Stevaniah Kavela", "IT"),
    ("EMP002", "Mercy Mukhwana", "IT"),
    ("EMP003", "Eric Mokaya", "IT / ICT"),
    ("EMP004", "Caroline Ngugi", "IT / ICT"),
    ("EMP005", "Lilian Kimani", "Finance"),
    ("EMP006", "Maureen Kerubo", "Finance"),
    ("EMP007", "Alice Muthoni", "Operations"),
    ("EMP008", "Michael Mureithi", "Operations"),
    ("EMP009", "Patrick Ndegwa", "Risk & Compliance"),
    ("EMP010", "Margaret Njeri", "Risk & Compliance"),
    ("EMP011", "Elizabeth Mungai", "Internal Audit"),
    ("EMP012", "Ebby Gesare", "Internal Audit"),
    ("EMP013", "Vivian Orisa", "Customer Service"),
    ("EMP014", "Juliana Jeptoo", "Customer Service"),
    ("EMP015", "Faith Bonareri", "Management"),
    ("EMP016", "Patience Mutunga", "Management"),
    ("EMP017", "Eva Mukami", "Security"),
    ("EMP018", "Peter Kariuki", "Security"),
    ("EMP019", "Ken Okwero", "Data Analysis"),
    ("EMP020", "Bonface Kioko", "Data Analysis"),
    ("EMP021", "Clive Odame", "admin"),
]

ADMIN_LEAVE = LeaveBalances(annual=30, sick=15, personal=10)


def _email(full_name: str) -> str:
    return f"{full_name.lower().replace(' ', '.')}@{EMAIL_DOMAIN}"


def default_users() -> List[User]:
    return [
        User(
            id=staff_id,
            full_name=full_name,
            department=department,
            email=_email(full_name),
            leave_balances=ADMIN_LEAVE if department == "admin" else LeaveBalances(),
        )
        for staff_id, full_name, department in _STAFF
    ]


async def seed_users(repository: IUserRepository) -> int:
    """Insert the default staff when the directory is empty. Returns rows added."""
    if await repository.count() > 0:
        return 0

    users = default_users()
    for user in users:
        await repository.create(user)

    logger.info("Seeded user directory", extra={"users": len(users)})
    return len(users)
