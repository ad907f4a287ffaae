"""Tests for the role hierarchy and credential lookup."""

import pytest

from qrdocs.core.config import Settings
from qrdocs.core.errors import Forbidden
from qrdocs.core.roles import Role, RoleHierarchy, authorize, level_of
from qrdocs.core.security import HashedCredentialStore
from tests.conftest import staff_session


@pytest.fixture(scope="module")
def hierarchy() -> RoleHierarchy:
    return RoleHierarchy.from_settings(Settings())


@pytest.fixture(scope="module")
def verifier(hierarchy: RoleHierarchy) -> HashedCredentialStore:
    return HashedCredentialStore.from_hierarchy(hierarchy)


def test_levels_are_a_strict_total_order():
    levels = [level_of(r) for r in Role]
    assert levels == sorted(set(levels))
    assert level_of("client") == 0
    assert level_of(Role.CASHIER) < level_of(Role.HEAD_CASHIER) < level_of(Role.ADMIN)
    assert level_of(Role.NIKITOVSKY) < level_of(Role.ROLE24)


def test_credential_for(hierarchy: RoleHierarchy):
    assert hierarchy.credential_for(Role.CLIENT) is None
    assert hierarchy.credential_for("cashier") == "25"
    assert hierarchy.credential_for(Role.ADMIN) == "2025"


def test_missing_secret_rejected():
    with pytest.raises(ValueError):
        RoleHierarchy({Role.CASHIER: "25"})


def test_nikitovsky_entry_resolves_both_tiers(hierarchy, verifier):
    settings = Settings()
    assert hierarchy.resolve(Role.NIKITOVSKY, settings.NIKITOVSKY_SECRET, verifier) is Role.NIKITOVSKY
    assert hierarchy.resolve(Role.NIKITOVSKY, settings.ROLE24_SECRET, verifier) is Role.ROLE24
    assert hierarchy.resolve(Role.NIKITOVSKY, "nope", verifier) is None


def test_secret_of_other_entry_point_does_not_resolve(hierarchy, verifier):
    assert hierarchy.resolve(Role.CASHIER, "2025", verifier) is None
    assert hierarchy.resolve(Role.CASHIER, "25", verifier) is Role.CASHIER


def test_role24_is_not_an_entry_point(hierarchy):
    assert not hierarchy.is_entry_point(Role.ROLE24)
    assert not hierarchy.is_entry_point("manager")
    assert hierarchy.is_entry_point("client")


def test_verifier_never_stores_plain_secrets(verifier):
    assert "25" not in verifier._hashes.values()
    assert verifier.verify(Role.CASHIER, "25")
    assert not verifier.verify(Role.CASHIER, "")
    assert not verifier.verify(Role.CLIENT, "anything")


def test_authorize():
    authorize(staff_session(Role.ADMIN), Role.CASHIER)
    authorize(staff_session(Role.CASHIER), Role.CASHIER)
    with pytest.raises(Forbidden) as exc:
        authorize(staff_session(Role.CASHIER), Role.HEAD_CASHIER)
    assert exc.value.required_level == Role.HEAD_CASHIER.level
    assert exc.value.params["required_role"] == "head-cashier"
