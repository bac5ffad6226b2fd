"""
Tests for AuditService.

Audit logging is best-effort: a missing actor or a failing store never
propagates to the caller.
"""
import logging
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from hotel_booking.models.ontology import SystemLog
from hotel_booking.services.audit_service import AuditService, AuditAction


@pytest.fixture
def audit_service(db_session):
    return AuditService(db_session)


class TestAppend:
    def test_append_with_actor(self, audit_service, staff_user, db_session):
        assert audit_service.append(AuditAction.UPDATE, "bookings", 7, staff_user.id) is True

        log = db_session.query(SystemLog).one()
        assert log.action == "UPDATE"
        assert log.table_name == "bookings"
        assert log.record_id == 7
        assert log.user_id == staff_user.id
        assert log.created_at is not None

    def test_missing_actor_is_skipped_with_warning(self, audit_service, db_session, caplog):
        with caplog.at_level(logging.WARNING, logger="hotel_booking.services.audit_service"):
            assert audit_service.append(AuditAction.CREATE, "bookings", 1, None) is False

        assert db_session.query(SystemLog).count() == 0
        assert "no actor" in caplog.text

    def test_store_failure_is_swallowed(self):
        db = MagicMock()
        log_repo = MagicMock()
        log_repo.append.side_effect = OperationalError("INSERT", {}, Exception("locked"))
        service = AuditService(db, log_repo=log_repo)

        assert service.append(AuditAction.DELETE, "payments", 3, 1) is False
        db.rollback.assert_called_once()
        db.commit.assert_not_called()

    def test_record_id_may_be_empty(self, audit_service, staff_user, db_session):
        audit_service.append(AuditAction.CREATE, "daily_booking_summaries", None, staff_user.id)
        assert db_session.query(SystemLog).one().record_id is None
