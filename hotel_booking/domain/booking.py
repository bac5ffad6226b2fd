"""
预订领域规则
状态机与日期区间重叠判定
"""
from datetime import date

from hotel_booking.domain.state_machine import StateMachine, StateMachineConfig, StateTransition
from hotel_booking.models.ontology import BookingStatus


def _create_booking_state_machine() -> StateMachine:
    """创建预订状态机"""
    s = BookingStatus
    transitions = [
        StateTransition(s.PENDING, s.CONFIRMED, "confirm"),
        StateTransition(s.CONFIRMED, s.CHECKED_IN, "check_in"),
        StateTransition(s.CHECKED_IN, s.CHECKED_OUT, "check_out"),
        StateTransition(s.CHECKED_OUT, s.COMPLETED, "complete"),
    ]
    # 任何非终态都可以取消
    for state in (s.PENDING, s.CONFIRMED, s.CHECKED_IN, s.CHECKED_OUT):
        transitions.append(StateTransition(state, s.CANCELED, "cancel"))

    return StateMachine(
        config=StateMachineConfig(
            name="Booking",
            states=list(s),
            transitions=transitions,
            initial_state=s.PENDING,
            terminal_states=frozenset({s.CANCELED, s.COMPLETED}),
        )
    )


booking_state_machine = _create_booking_state_machine()


def can_transition(from_status: BookingStatus, to_status: BookingStatus) -> bool:
    """预订状态转换是否合法"""
    return booking_state_machine.can_transition(from_status, to_status)


def dates_overlap(existing_start: date, existing_end: date,
                  requested_start: date, requested_end: date) -> bool:
    """
    半开区间重叠判定 [start, end)

    离店日等于入住日不算重叠，允许前后衔接的预订
    """
    return existing_start < requested_end and existing_end > requested_start
