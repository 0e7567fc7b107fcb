"""
Access Infrastructure Layer
===========================

Loading of the department access policy (built-in table or YAML file).
"""

from helpdesk.access.infrastructure.policy import (
    AccessPolicyConfig,
    DEFAULT_POLICY_TABLE,
    YAMLPolicyProvider,
    default_policy,
)

__all__ = [
    "AccessPolicyConfig",
    "DEFAULT_POLICY_TABLE",
    "YAMLPolicyProvider",
    "default_policy",
]
