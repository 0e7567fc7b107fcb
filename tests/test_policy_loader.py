"""Loading the department access policy from YAML."""

import pytest

from helpdesk.access.domain import AccessResolver, PermissionLevel
from helpdesk.access.infrastructure import DEFAULT_POLICY_TABLE, YAMLPolicyProvider
from helpdesk.core import ConfigurationException


def test_no_path_uses_builtin_table():
    policy = YAMLPolicyProvider(None).get_policy()
    assert set(policy.departments) == set(DEFAULT_POLICY_TABLE)
    assert policy.level_for("IT", "ticketing") == PermissionLevel.OWNER


def test_missing_file_falls_back_to_builtin_table(tmp_path):
    policy = YAMLPolicyProvider(tmp_path / "missing.yaml").get_policy()
    assert policy.level_for("Finance", "finance") == PermissionLevel.OWNER


def test_yaml_file_replaces_the_table(tmp_path):
    path = tmp_path / "policy.yaml"
    path.write_text(
        "departments:\n"
        "  Treasury:\n"
        "    ticketing: user\n"
        "    finance: FULL\n"
        "  root:\n"
        "    ticketing: owner\n"
        "super_admin: root\n"
        "restricted_allow_list: [root]\n"
    )

    resolver = AccessResolver(YAMLPolicyProvider(path).get_policy())

    assert resolver.level_for("Treasury", "finance") == PermissionLevel.FULL
    assert resolver.is_super_admin("root")
    assert resolver.has_access("root", "users")
    assert not resolver.has_access("IT", "users")
    assert resolver.resolve_department("Finance") == "Finance"
    assert not resolver.has_access("Finance", "finance")


def test_unknown_level_in_file_is_rejected(tmp_path):
    path = tmp_path / "policy.yaml"
    path.write_text("departments:\n  Finance:\n    finance: godmode\n")

    with pytest.raises(ConfigurationException):
        YAMLPolicyProvider(path)
