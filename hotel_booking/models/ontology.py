"""
本体对象定义
预订、支付、每日汇总为核心实体；房间、房型、客户、价格、用户为协作实体（只读）
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, Date,
    ForeignKey, Text, Enum as SQLEnum, Boolean, Numeric
)
from sqlalchemy.orm import relationship
from hotel_booking.database import Base


# ============== 枚举定义 ==============

class BookingStatus(str, Enum):
    """预订状态枚举"""
    PENDING = "pending"          # 待确认
    CONFIRMED = "confirmed"      # 已确认
    CHECKED_IN = "checked_in"    # 已入住
    CHECKED_OUT = "checked_out"  # 已退房
    CANCELED = "canceled"        # 已取消
    COMPLETED = "completed"      # 已完成


# 不占用房间的状态
INACTIVE_BOOKING_STATUSES = (BookingStatus.CANCELED, BookingStatus.COMPLETED)


class PaymentStatus(str, Enum):
    """支付状态"""
    PENDING = "pending"        # 待支付
    COMPLETED = "completed"    # 已支付
    FAILED = "failed"          # 失败
    REFUNDED = "refunded"      # 已退款


class PaymentMethod(str, Enum):
    """支付方式"""
    NOT_SPECIFIED = "not_specified"  # 未指定，稍后收集
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"


class SummaryStatus(str, Enum):
    """汇总复核状态"""
    UNCHECKED = "unchecked"    # 未复核
    CHECKED = "checked"        # 已复核
    CONFIRMED = "confirmed"    # 已确认


class RoomStatus(str, Enum):
    """房间状态"""
    AVAILABLE = "available"      # 可用
    MAINTENANCE = "maintenance"  # 维修中


class UserRole(str, Enum):
    """用户角色"""
    ADMIN = "admin"
    STAFF = "staff"


# ============== 协作实体 ==============

class RoomType(Base):
    """房型对象"""
    __tablename__ = "room_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)  # 房型名称
    description = Column(Text)
    capacity = Column(Integer, default=2)                   # 可住人数
    default_price = Column(Numeric(10, 2))                  # 默认价格
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rooms = relationship("Room", back_populates="room_type")


class Room(Base):
    """房间对象，只有 available 状态的房间可被预订"""
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String(10), unique=True, nullable=False)  # 房间号
    room_type_id = Column(Integer, ForeignKey("room_types.id"), nullable=False)
    description = Column(Text)
    status = Column(SQLEnum(RoomStatus), default=RoomStatus.AVAILABLE)
    floor = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    room_type = relationship("RoomType", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room")


class Customer(Base):
    """客户对象"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    identity_number = Column(String(50), unique=True)   # 证件号码
    address = Column(Text)
    phone = Column(String(20))
    email = Column(String(100))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings = relationship("Booking", back_populates="customer")


class RatePrice(Base):
    """价格方案"""
    __tablename__ = "rate_prices"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    room_type_id = Column(Integer, ForeignKey("room_types.id"), nullable=False)
    price_per_night = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    room_type = relationship("RoomType")


class User(Base):
    """系统用户，审计日志的操作人"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), default=UserRole.STAFF)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)


# ============== 核心实体 ==============

class Booking(Base):
    """
    预订对象 - 核心聚合根
    不变量：check_out_date > check_in_date，创建时 total_amount > 0
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    rate_price_id = Column(Integer, ForeignKey("rate_prices.id"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), index=True)
    room_type_id = Column(Integer, ForeignKey("room_types.id"))
    check_in_date = Column(Date, nullable=False)         # 入住日期
    check_out_date = Column(Date, nullable=False)        # 离店日期
    status = Column(SQLEnum(BookingStatus), default=BookingStatus.PENDING, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    booking_date = Column(DateTime, default=datetime.utcnow)  # 下单时间
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship("Customer", back_populates="bookings")
    rate_price = relationship("RatePrice")
    room = relationship("Room", back_populates="bookings")
    room_type = relationship("RoomType")
    # 删除预订时由存储级联删除其支付记录
    payments = relationship(
        "Payment", back_populates="booking", order_by="Payment.id",
        cascade="all, delete-orphan"
    )

    @property
    def is_active(self) -> bool:
        """是否占用房间"""
        return self.status not in INACTIVE_BOOKING_STATUSES


class Payment(Base):
    """支付记录，创建时与预订一一对应"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(SQLEnum(PaymentMethod), default=PaymentMethod.NOT_SPECIFIED, nullable=False)
    payment_date = Column(DateTime, default=datetime.utcnow)
    status = Column(SQLEnum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    booking = relationship("Booking", back_populates="payments")


class DailyBookingSummary(Base):
    """
    每日预订汇总 - 按日期物化的快照
    以 summary_date 为主键，重新生成时覆盖而不是追加
    """
    __tablename__ = "daily_booking_summaries"

    summary_date = Column(Date, primary_key=True)
    total_bookings = Column(Integer, default=0, nullable=False)
    total_amount = Column(Numeric(12, 2), default=0, nullable=False)
    pending_bookings = Column(Integer, default=0, nullable=False)
    confirmed_bookings = Column(Integer, default=0, nullable=False)
    checked_in_bookings = Column(Integer, default=0, nullable=False)
    checked_out_bookings = Column(Integer, default=0, nullable=False)
    canceled_bookings = Column(Integer, default=0, nullable=False)
    completed_bookings = Column(Integer, default=0, nullable=False)
    booking_ids = Column(Text, default="")               # 逗号分隔的预订ID
    status = Column(SQLEnum(SummaryStatus), default=SummaryStatus.UNCHECKED, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    @property
    def booking_id_list(self) -> list:
        """解析预订ID列表"""
        if not self.booking_ids:
            return []
        return [int(x) for x in self.booking_ids.split(",")]


class SystemLog(Base):
    """
    系统日志对象
    记录关键操作用于审计
    """
    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String(20), nullable=False)          # CREATE / UPDATE / DELETE
    table_name = Column(String(50), nullable=False)
    record_id = Column(Integer)                          # 汇总以日期为键，无数字ID
    user_id = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User")
