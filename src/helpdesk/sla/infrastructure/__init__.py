"""
SLA Infrastructure Layer
========================

Contains:
- SLAConfigManager: YAML-backed SLA policy provider
- SLAScheduler: APScheduler wrapper for the periodic sweep
"""

from helpdesk.sla.infrastructure.external import SLAConfigManager, SLAScheduler

__all__ = [
    "SLAConfigManager",
    "SLAScheduler",
]
