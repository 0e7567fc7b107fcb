"""
Bank Helpdesk
=============

Internal helpdesk and ticketing service: department access control,
ticket lifecycle with SLA tracking, and the staff directory.
"""

__version__ = "1.0.0"
