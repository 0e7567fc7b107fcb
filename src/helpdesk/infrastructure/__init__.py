"""
Infrastructure Layer
====================

Cross-module technical concerns (database engine and sessions).
"""
