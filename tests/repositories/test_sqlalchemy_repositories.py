"""
SQLAlchemy 仓储测试
仓储只 flush 不提交；唯一约束冲突翻译为 ConflictingDataError
"""
import pytest
from datetime import date
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from hotel_booking.errors import ConflictingDataError
from hotel_booking.models.ontology import Customer, Booking, BookingStatus
from hotel_booking.repositories import SqlAlchemyBookingRepository
from hotel_booking.repositories.base import SqlAlchemyRepository, is_conflict


class TestConflictTranslation:
    def test_unique_violation_becomes_conflict(self, db_session, sample_customer):
        repo = SqlAlchemyRepository(db_session)
        db_session.add(Customer(first_name="四", surname="李",
                                identity_number=sample_customer.identity_number))

        with pytest.raises(ConflictingDataError):
            repo._flush()
        db_session.rollback()

    def test_postgres_exclusion_violation_is_conflict(self):
        orig = MagicMock(pgcode="23P01")
        assert is_conflict(IntegrityError("INSERT", {}, orig))

    def test_not_null_violation_is_not_conflict(self):
        orig = Exception("NOT NULL constraint failed: bookings.customer_id")
        assert not is_conflict(IntegrityError("INSERT", {}, orig))


class TestBookingRepository:
    def test_create_does_not_commit(self, db_session, sample_customer, sample_rate_price):
        repo = SqlAlchemyBookingRepository(db_session)
        repo.create(Booking(customer_id=sample_customer.id, rate_price_id=sample_rate_price.id,
                            check_in_date=date(2024, 1, 1), check_out_date=date(2024, 1, 2),
                            total_amount=100, status=BookingStatus.PENDING))
        db_session.rollback()

        assert db_session.query(Booking).count() == 0

    def test_find_overlapping_excludes_self_and_inactive(self, db_session, make_booking, sample_room):
        own = make_booking(room_id=sample_room.id)
        make_booking(room_id=sample_room.id, status=BookingStatus.CANCELED)
        repo = SqlAlchemyBookingRepository(db_session)

        assert repo.find_overlapping(sample_room.id, date(2024, 6, 11), date(2024, 6, 13)) == [own]
        assert repo.find_overlapping(sample_room.id, date(2024, 6, 11), date(2024, 6, 13),
                                     exclude_id=own.id) == []

    def test_list_for_day_rejects_unknown_field(self, db_session):
        with pytest.raises(ValueError):
            SqlAlchemyBookingRepository(db_session).list_for_day(date(2024, 1, 1), "check_in_date")

    def test_delete_missing_returns_false(self, db_session):
        assert SqlAlchemyBookingRepository(db_session).delete(999) is False
