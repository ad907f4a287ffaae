"""Tests for the HTTP session registry."""

from qrdocs.core.roles import Role
from qrdocs.services.desk import SessionRegistry
from tests.conftest import FakeClock, staff_session


def test_expired_sessions_are_dropped(clock: FakeClock):
    registry = SessionRegistry(ttl_seconds=60, clock=clock)
    old = staff_session(Role.CASHIER)
    registry.add(old)
    assert registry.get(old.session_id) is old

    clock.advance(60)
    assert registry.get(old.session_id) is None
    assert len(registry) == 0


def test_add_prunes_expired_entries(clock: FakeClock):
    registry = SessionRegistry(ttl_seconds=60, clock=clock)
    for _ in range(5):
        registry.add(staff_session(Role.CASHIER))
    clock.advance(61)
    fresh = staff_session(Role.ADMIN)
    registry.add(fresh)
    assert len(registry) == 1
    assert registry.get(fresh.session_id) is fresh


def test_discard(clock: FakeClock):
    registry = SessionRegistry(ttl_seconds=60, clock=clock)
    session = staff_session(Role.CASHIER)
    registry.add(session)
    registry.discard(session.session_id)
    assert registry.get(session.session_id) is None
