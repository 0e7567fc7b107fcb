"""
Infrastructure Layer
=====================

Low-level technical concerns:
- Logging setup
- Per-request log context (correlation id, caller department)
"""
