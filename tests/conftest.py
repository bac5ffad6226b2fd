"""
Pytest 配置和共享 fixtures
"""
import os

# 应用启动时 init_db 使用的库；测试数据走下面的内存引擎
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hotel_booking.database import Base, get_db
from hotel_booking.models import ontology  # noqa
from hotel_booking.models.ontology import (
    User, UserRole, RoomType, Room, RoomStatus, Customer, RatePrice,
    Booking, BookingStatus
)
from hotel_booking.security.auth import get_password_hash, create_access_token
from hotel_booking.services.room_lock import room_locks
from hotel_booking.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_room_locks():
    """每个测试使用干净的房间锁表"""
    room_locks.clear()
    yield
    room_locks.clear()


# ============== 认证相关 Fixtures ==============

@pytest.fixture
def staff_user(db_session):
    """创建前台用户"""
    user = User(
        username="front1",
        password_hash=get_password_hash("123456"),
        role=UserRole.STAFF,
        is_active=True
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def staff_token(staff_user):
    """前台用户 token"""
    return create_access_token(staff_user.id, staff_user.role)


@pytest.fixture
def auth_headers(staff_token):
    """返回带认证的请求头"""
    return {"Authorization": f"Bearer {staff_token}"}


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_room_type(db_session):
    """创建测试房型"""
    room_type = RoomType(
        name="标准间",
        description="Standard Room",
        capacity=2,
        default_price=Decimal("100.00")
    )
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_rooms(db_session, sample_room_type):
    """创建 101、102、103 三个可用房间"""
    rooms = []
    for number in ("101", "102", "103"):
        room = Room(
            room_number=number,
            floor=1,
            room_type_id=sample_room_type.id,
            status=RoomStatus.AVAILABLE
        )
        db_session.add(room)
        rooms.append(room)
    db_session.commit()
    for room in rooms:
        db_session.refresh(room)
    return rooms


@pytest.fixture
def sample_room(sample_rooms):
    """101 房间"""
    return sample_rooms[0]


@pytest.fixture
def sample_customer(db_session):
    """创建测试客户"""
    customer = Customer(
        first_name="三",
        surname="张",
        identity_number="110101199001011234",
        address="北京市东城区",
        phone="13800138000"
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def sample_rate_price(db_session, sample_room_type):
    """创建测试价格方案"""
    rate = RatePrice(
        name="门市价",
        room_type_id=sample_room_type.id,
        price_per_night=Decimal("100.00")
    )
    db_session.add(rate)
    db_session.commit()
    db_session.refresh(rate)
    return rate


@pytest.fixture
def make_booking(db_session, sample_customer, sample_rate_price, sample_room_type):
    """直接写库创建预订的工厂，不经过服务层校验"""
    def _make(**kwargs):
        defaults = {
            "customer_id": sample_customer.id,
            "rate_price_id": sample_rate_price.id,
            "room_type_id": sample_room_type.id,
            "check_in_date": date(2024, 6, 10),
            "check_out_date": date(2024, 6, 12),
            "status": BookingStatus.CONFIRMED,
            "total_amount": Decimal("200.00"),
            "booking_date": datetime(2024, 6, 1, 9, 30),
        }
        defaults.update(kwargs)
        booking = Booking(**defaults)
        db_session.add(booking)
        db_session.commit()
        db_session.refresh(booking)
        return booking
    return _make
