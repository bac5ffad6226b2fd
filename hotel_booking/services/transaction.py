"""
事务边界
块内全部成功才提交；业务异常原样抛出，其余存储错误回滚后收敛为 InternalError
"""
from contextlib import contextmanager
from functools import wraps
from typing import Iterator
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_booking.errors import BookingSystemError, InternalError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, operation: str) -> Iterator[Session]:
    """
    包裹一次写操作

    Args:
        db: 数据库会话
        operation: 操作描述，用于日志
    """
    try:
        yield db
        db.commit()
    except BookingSystemError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error during {operation}")
        raise InternalError() from e
    except Exception:
        db.rollback()
        raise


def read_or_internal(operation: str):
    """读操作的存储错误收敛为 InternalError"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.exception(f"Error during {operation}")
                raise InternalError() from e
        return wrapper
    return decorator
