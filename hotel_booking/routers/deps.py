"""
路由公共依赖
业务异常到 HTTP 响应的转换、分页参数
"""
import logging
from fastapi import HTTPException, Query
from hotel_booking.config import settings
from hotel_booking.errors import BookingSystemError

logger = logging.getLogger(__name__)


def http_error(e: BookingSystemError) -> HTTPException:
    """业务异常 -> HTTPException；内部错误只返回通用信息"""
    if e.status_code >= 500:
        logger.error(f"Internal error returned to client: {type(e).__name__}")
    return HTTPException(status_code=e.status_code, detail=e.message)


class PageParams:
    """分页参数"""

    def __init__(
        self,
        skip: int = Query(0, ge=0),
        limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    ):
        self.skip = skip
        self.limit = limit
