"""
应用配置
从环境变量读取配置
"""
from typing import List
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Hotel Booking"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./hotel_booking.db"

    # JWT 配置
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # 分页
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 1000

    # 每日汇总：按哪个时间字段判定预订属于某一天
    # booking_date | created_at | updated_at | created_or_updated
    SUMMARY_DATE_FIELD: str = "booking_date"
    # 计入汇总金额的预订状态（已实现收入）
    SUMMARY_REVENUE_STATUSES: List[str] = ["completed"]

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# 全局设置实例
settings = Settings()
