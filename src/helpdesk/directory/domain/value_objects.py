"""
Directory Value Objects
=======================
"""

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class LeaveBalances:
    """Remaining leave days per leave type."""
    annual: int = 25
    sick: int = 10
    personal: int = 5
    maternity: int = 0
    paternity: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


ASSET_CATEGORIES = ("Laptop", "Desktop", "Monitor", "Phone", "Printer", "Peripheral", "Other")
