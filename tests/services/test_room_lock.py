"""
房间锁测试
"""
import threading
from datetime import date
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hotel_booking.database import Base
from hotel_booking.errors import ConflictingDataError
from hotel_booking.models.ontology import (
    Booking, Customer, RatePrice, Room, RoomStatus, RoomType
)
from hotel_booking.models.schemas import BookingCreate
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.room_lock import RoomLockRegistry


def test_same_room_is_serialized():
    locks = RoomLockRegistry()
    entered = threading.Event()
    release = threading.Event()
    order = []

    def first():
        with locks.hold(1):
            order.append("first-in")
            entered.set()
            release.wait(timeout=5)
            order.append("first-out")

    def second():
        entered.wait(timeout=5)
        with locks.hold(1):
            order.append("second-in")

    t1 = threading.Thread(target=first)
    t2 = threading.Thread(target=second)
    t1.start()
    t2.start()
    entered.wait(timeout=5)
    t2.join(timeout=0.2)
    assert t2.is_alive()

    release.set()
    t1.join(timeout=5)
    t2.join(timeout=5)
    assert order == ["first-in", "first-out", "second-in"]


def test_different_rooms_do_not_block():
    locks = RoomLockRegistry()
    with locks.hold(1):
        acquired = []
        t = threading.Thread(target=lambda: acquired.append(locks._get_lock(2).acquire(timeout=1)))
        t.start()
        t.join(timeout=5)
        assert acquired == [True]


def test_no_room_no_lock():
    locks = RoomLockRegistry()
    with locks.hold(None):
        with locks.hold(None):
            pass
    assert locks._locks == {}


def test_concurrent_bookings_for_same_room(tmp_path):
    """多个线程各用独立会话预订同一房间同一时段，只有一个成功"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'concurrent.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    seed = SessionLocal()
    room_type = RoomType(name="标准间", capacity=2, default_price=Decimal("100"))
    seed.add(room_type)
    seed.flush()
    room = Room(room_number="101", floor=1, room_type_id=room_type.id, status=RoomStatus.AVAILABLE)
    customer = Customer(first_name="三", surname="张")
    rate = RatePrice(name="门市价", room_type_id=room_type.id, price_per_night=Decimal("100"))
    seed.add_all([room, customer, rate])
    seed.commit()
    data = BookingCreate(
        customer_id=customer.id, rate_price_id=rate.id, room_id=room.id,
        check_in_date=date(2024, 8, 1), check_out_date=date(2024, 8, 3),
        total_amount=Decimal("200"),
    )
    seed.close()

    workers = 4
    barrier = threading.Barrier(workers)
    results = []
    results_lock = threading.Lock()

    def book():
        session = SessionLocal()
        try:
            barrier.wait(timeout=5)
            try:
                BookingService(session).create_booking(data)
                outcome = "ok"
            except ConflictingDataError:
                outcome = "conflict"
            with results_lock:
                results.append(outcome)
        finally:
            session.close()

    threads = [threading.Thread(target=book) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(results) == ["conflict"] * (workers - 1) + ["ok"]

    check = SessionLocal()
    try:
        assert check.query(Booking).filter(Booking.room_id == room.id).count() == 1
    finally:
        check.close()
        engine.dispose()
