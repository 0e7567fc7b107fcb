"""
Directory Bounded Context
=========================

Employee accounts and the per-user asset register.

Reads of the directory are gated on the restricted ``users`` module;
the asset register is gated on ``inventory``.
"""

__version__ = "1.0.0"
