"""
Pydantic 模式定义
用于服务输入与 API 请求/响应

预订的必填校验放在服务层（需返回 InvalidData 且不触达存储），
因此 BookingCreate 的字段在模式层保持可选
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict
from hotel_booking.models.ontology import (
    BookingStatus, PaymentStatus, PaymentMethod, SummaryStatus, RoomStatus
)


# ============== 认证 Schemas ==============

class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


# ============== 房间 Schemas ==============

class RoomWithTypeResponse(BaseModel):
    """房间及房型名称"""
    id: int
    room_number: str
    room_type_id: int
    room_type_name: str
    description: Optional[str] = None
    status: RoomStatus
    floor: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class RoomPage(BaseModel):
    items: List[RoomWithTypeResponse]
    total: int


# ============== 预订 Schemas ==============

class BookingCreate(BaseModel):
    customer_id: Optional[int] = None
    rate_price_id: Optional[int] = None
    room_id: Optional[int] = None
    room_type_id: Optional[int] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    total_amount: Optional[Decimal] = None
    status: Optional[BookingStatus] = None
    booking_date: Optional[datetime] = None


class BookingUpdate(BaseModel):
    """部分更新：None 表示保持原值"""
    customer_id: Optional[int] = None
    rate_price_id: Optional[int] = None
    room_id: Optional[int] = None
    room_type_id: Optional[int] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    status: Optional[BookingStatus] = None
    total_amount: Optional[Decimal] = None


class BookingFilter(BaseModel):
    """
    预订筛选条件
    每个字段独立可选，None 为通配；0 或其他零值是合法的精确条件
    """
    id: Optional[int] = None
    customer_id: Optional[int] = None
    rate_price_id: Optional[int] = None
    room_id: Optional[int] = None
    room_type_id: Optional[int] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    status: Optional[BookingStatus] = None
    total_amount: Optional[Decimal] = None
    created_on: Optional[date] = None
    updated_on: Optional[date] = None


class BookingResponse(BaseModel):
    id: int
    customer_id: int
    rate_price_id: int
    room_id: Optional[int] = None
    room_type_id: Optional[int] = None
    check_in_date: date
    check_out_date: date
    status: BookingStatus
    total_amount: Decimal
    booking_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class BookingPage(BaseModel):
    items: List[BookingResponse]
    total: int


class BookingUpdateResponse(BaseModel):
    """updated 为 False 表示请求与现有记录一致，未写入"""
    updated: bool
    booking: BookingResponse


class BookingDetailResponse(BaseModel):
    """预订详情（客户、房间、最近一次支付）"""
    booking_id: int
    customer_id: int
    booking_price: Decimal
    booking_status: BookingStatus
    check_in_date: date
    check_out_date: date
    booking_created_at: Optional[datetime] = None
    booking_updated_at: Optional[datetime] = None
    room_id: Optional[int] = None
    room_number: Optional[str] = None
    floor: Optional[int] = None
    rate_price_id: int
    room_type_id: Optional[int] = None
    room_type_name: Optional[str] = None
    customer_first_name: Optional[str] = None
    customer_surname: Optional[str] = None
    customer_identity_number: Optional[str] = None
    customer_address: Optional[str] = None
    payment_id: Optional[int] = None
    payment_status: Optional[PaymentStatus] = None
    payment_update_date: Optional[datetime] = None


class BookingDetailPage(BaseModel):
    items: List[BookingDetailResponse]
    total: int


# ============== 支付 Schemas ==============

class PaymentCreate(BaseModel):
    booking_id: int
    amount: Optional[Decimal] = None
    payment_method: PaymentMethod = PaymentMethod.NOT_SPECIFIED
    payment_date: Optional[datetime] = None
    status: Optional[PaymentStatus] = None


class PaymentUpdate(BaseModel):
    amount: Optional[Decimal] = None
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[datetime] = None
    status: Optional[PaymentStatus] = None


class PaymentResponse(BaseModel):
    id: int
    booking_id: int
    amount: Decimal
    payment_method: PaymentMethod
    payment_date: Optional[datetime] = None
    status: PaymentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PaymentPage(BaseModel):
    items: List[PaymentResponse]
    total: int


# ============== 每日汇总 Schemas ==============

class SummaryGenerateRequest(BaseModel):
    summary_date: date


class SummaryStatusUpdate(BaseModel):
    status: SummaryStatus


class DailySummaryResponse(BaseModel):
    summary_date: date
    total_bookings: int
    total_amount: Decimal
    pending_bookings: int
    confirmed_bookings: int
    checked_in_bookings: int
    checked_out_bookings: int
    canceled_bookings: int
    completed_bookings: int
    booking_ids: str = ""
    status: SummaryStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class DailySummaryPage(BaseModel):
    items: List[DailySummaryResponse]
    total: int
