"""
状态机 - 声明状态与合法转换，供服务层在写入前校验
"""
from typing import Dict, FrozenSet, List, Optional, Set
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateTransition:
    """
    状态转换定义

    Attributes:
        from_state: 源状态
        to_state: 目标状态
        trigger: 触发动作
    """

    from_state: str
    to_state: str
    trigger: str


@dataclass
class StateMachineConfig:
    """
    状态机配置

    Attributes:
        name: 状态机名称
        states: 所有状态的列表
        transitions: 转换列表
        initial_state: 初始状态
        terminal_states: 终态，不允许再离开
    """

    name: str
    states: List[str]
    transitions: List[StateTransition]
    initial_state: str
    terminal_states: FrozenSet[str] = frozenset()


class StateMachine:
    """
    无实例状态的状态机：只回答“能否从 A 转到 B”

    Example:
        >>> machine = StateMachine(StateMachineConfig(
        ...     name="Booking",
        ...     states=["pending", "confirmed"],
        ...     transitions=[StateTransition("pending", "confirmed", "confirm")],
        ...     initial_state="pending",
        ... ))
        >>> machine.can_transition("pending", "confirmed")
        True
    """

    def __init__(self, config: StateMachineConfig):
        self._config = config
        # 构建转换映射: from_state -> {to_state: transition}
        self._transition_map: Dict[str, Dict[str, StateTransition]] = {}
        for t in config.transitions:
            if t.from_state in config.terminal_states:
                raise ValueError(f"{config.name}: 终态 {t.from_state} 不能有出边")
            self._transition_map.setdefault(t.from_state, {})[t.to_state] = t

    @property
    def config(self) -> StateMachineConfig:
        """获取状态机配置"""
        return self._config

    @property
    def initial_state(self) -> str:
        return self._config.initial_state

    def is_terminal(self, state: str) -> bool:
        return state in self._config.terminal_states

    def can_transition(self, from_state: str, to_state: str) -> bool:
        """
        检查转换是否合法

        停留在同一状态不算转换，总是允许
        """
        if from_state not in self._config.states or to_state not in self._config.states:
            return False
        if from_state == to_state:
            return True
        return to_state in self._transition_map.get(from_state, {})

    def get_transition(self, from_state: str, to_state: str) -> Optional[StateTransition]:
        """获取转换定义"""
        return self._transition_map.get(from_state, {}).get(to_state)

    def next_states(self, from_state: str) -> Set[str]:
        """获取可达的下一状态"""
        return set(self._transition_map.get(from_state, {}).keys())


__all__ = [
    "StateTransition",
    "StateMachineConfig",
    "StateMachine",
]
