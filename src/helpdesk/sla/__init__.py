"""
SLA Module
==========

Bounded Context for ticket service-level targets.

Responsibilities:
- Compute a ticket's due time from its priority and creation time
- Classify due times as good / warning / breach / unknown
- Periodically sweep open tickets and log at-risk counts
- Expose the active SLA table
"""

__version__ = "1.0.0"
