"""
Directory Interfaces Layer
==========================

Contains:
- Controllers: FastAPI route handlers for users and assets
"""

from helpdesk.directory.interfaces.controllers import directory_router, get_directory_service

__all__ = ["directory_router", "get_directory_service"]
