"""
错误分类
服务层只抛出这里定义的异常，路由层据 status_code 转换为 HTTP 响应
"""
from typing import Optional


class BookingSystemError(Exception):
    """业务异常基类"""

    status_code: int = 500
    default_message: str = "服务器内部错误"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidDataError(BookingSystemError):
    """输入数据不满足前置条件（缺字段、金额非正、日期倒置、非法状态转换）"""
    status_code = 400
    default_message = "无效的数据"


class DataNotFoundError(BookingSystemError):
    """引用的实体不存在"""
    status_code = 404
    default_message = "数据不存在"


class ConflictingDataError(BookingSystemError):
    """唯一性冲突或房间日期重叠"""
    status_code = 409
    default_message = "数据冲突"


class NoUpdatedDataError(BookingSystemError):
    """
    更新请求与现有记录完全一致

    不是失败：调用方据此区分“无事可做”与成功、失败
    """
    status_code = 200
    default_message = "没有需要更新的数据"


class InternalError(BookingSystemError):
    """存储或基础设施错误，细节只记录日志不返回给调用方"""
    status_code = 500
    default_message = "服务器内部错误"


class UnauthorizedError(BookingSystemError):
    """认证失败"""
    status_code = 401
    default_message = "未授权"
