"""
Access Control Module
=====================

Bounded Context for department-based role and permission resolution.

Responsibilities:
- Normalize free-text department names to policy keys
- Answer "can this department perform level X on module Y"
- Gate navigation and direct page access
- Provide the guard used by the ticket and directory services
"""

__version__ = "1.0.0"
