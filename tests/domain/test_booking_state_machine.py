"""
预订状态机与日期重叠判定
"""
import pytest
from datetime import date

from hotel_booking.domain import booking_state_machine, can_transition, dates_overlap
from hotel_booking.domain.state_machine import StateMachine, StateMachineConfig, StateTransition
from hotel_booking.models.ontology import BookingStatus as S


class TestBookingStateMachine:
    def test_initial_state_is_pending(self):
        assert booking_state_machine.initial_state == S.PENDING

    def test_terminal_states(self):
        assert booking_state_machine.is_terminal(S.CANCELED)
        assert booking_state_machine.is_terminal(S.COMPLETED)
        assert not booking_state_machine.is_terminal(S.CHECKED_OUT)

    @pytest.mark.parametrize("from_status,to_status", [
        (S.PENDING, S.CONFIRMED),
        (S.CONFIRMED, S.CHECKED_IN),
        (S.CHECKED_IN, S.CHECKED_OUT),
        (S.CHECKED_OUT, S.COMPLETED),
        (S.PENDING, S.CANCELED),
        (S.CHECKED_IN, S.CANCELED),
    ])
    def test_forward_transitions_allowed(self, from_status, to_status):
        assert can_transition(from_status, to_status)

    @pytest.mark.parametrize("from_status,to_status", [
        (S.PENDING, S.CHECKED_IN),
        (S.CONFIRMED, S.PENDING),
        (S.CANCELED, S.CONFIRMED),
        (S.COMPLETED, S.CHECKED_IN),
        (S.COMPLETED, S.CANCELED),
    ])
    def test_illegal_transitions_rejected(self, from_status, to_status):
        assert not can_transition(from_status, to_status)

    def test_same_status_is_not_a_transition(self):
        assert can_transition(S.CANCELED, S.CANCELED)
        assert booking_state_machine.get_transition(S.PENDING, S.PENDING) is None

    def test_next_states(self):
        assert booking_state_machine.next_states(S.PENDING) == {S.CONFIRMED, S.CANCELED}
        assert booking_state_machine.next_states(S.COMPLETED) == set()

    def test_trigger_names(self):
        assert booking_state_machine.get_transition(S.CONFIRMED, S.CHECKED_IN).trigger == "check_in"


class TestStateMachineConfig:
    def test_terminal_state_with_outgoing_edge_rejected(self):
        config = StateMachineConfig(
            name="Broken",
            states=["a", "b"],
            transitions=[StateTransition("b", "a", "back")],
            initial_state="a",
            terminal_states=frozenset({"b"}),
        )
        with pytest.raises(ValueError):
            StateMachine(config)

    def test_unknown_state_cannot_transition(self):
        assert not booking_state_machine.can_transition("no_show", S.CONFIRMED)


class TestDatesOverlap:
    def test_back_to_back_does_not_overlap(self):
        assert not dates_overlap(date(2024, 6, 10), date(2024, 6, 12),
                                 date(2024, 6, 12), date(2024, 6, 14))

    def test_partial_overlap(self):
        assert dates_overlap(date(2024, 6, 10), date(2024, 6, 12),
                             date(2024, 6, 11), date(2024, 6, 13))

    def test_contained_range(self):
        assert dates_overlap(date(2024, 6, 10), date(2024, 6, 20),
                             date(2024, 6, 12), date(2024, 6, 13))
