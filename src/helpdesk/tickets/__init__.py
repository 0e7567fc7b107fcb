"""
Tickets Module
==============

Bounded Context for the helpdesk ticket lifecycle.

Responsibilities:
- Submit tickets with routing defaults and an SLA due time
- List tickets filtered by the caller's role, search and facets
- Order by urgency and annotate with live SLA status
- Update status, department, priority, assignee and escalation
- Keep an audit trail of ticket actions
"""

__version__ = "1.0.0"
