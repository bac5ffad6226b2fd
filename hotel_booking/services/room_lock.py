"""
房间锁 - 进程内按房间串行化“检查重叠 + 写入”
多进程部署还需要数据库层的排他约束
"""
from contextlib import contextmanager
from typing import Dict, Iterator, Optional
import logging
import threading

logger = logging.getLogger(__name__)


class RoomLockRegistry:
    """按房间ID分配锁（线程安全）"""

    def __init__(self):
        self._locks: Dict[int, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _get_lock(self, room_id: int) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(room_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[room_id] = lock
            return lock

    @contextmanager
    def hold(self, room_id: Optional[int]) -> Iterator[None]:
        """持有房间锁；未指定房间时不加锁"""
        if room_id is None:
            yield
            return

        lock = self._get_lock(room_id)
        with lock:
            logger.debug(f"Room lock acquired: {room_id}")
            yield

    def clear(self) -> None:
        """清空所有锁（用于测试）"""
        with self._registry_lock:
            self._locks.clear()


# 全局房间锁
room_locks = RoomLockRegistry()
