"""Tests for the work-order status lifecycle"""
import pytest
import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from billing.errors import ValidationError
from billing.models import LaborEntry, WorkOrderStatus as S
from billing.work_order import (
    STATUS_LABELS, can_transition, is_terminal, next_step, parse_status, transition,
)


class TestTransition:

    def test_happy_path_to_completed(self):
        """
        Scenario: technician works a job start to finish
        Pending -> En Route -> Arrived -> In Progress -> Completed
        """
        status = S.PENDING
        for target in (S.EN_ROUTE, S.ARRIVED, S.IN_PROGRESS, S.COMPLETED):
            status = transition(status, target)

        assert status == S.COMPLETED
        assert is_terminal(status)

    def test_pause_and_resume(self):
        status = transition(S.IN_PROGRESS, S.ON_HOLD)
        status = transition(status, S.IN_PROGRESS)

        assert status == S.IN_PROGRESS

    @pytest.mark.parametrize("current,target", [
        (S.PENDING, S.COMPLETED),
        (S.EN_ROUTE, S.IN_PROGRESS),
        (S.ARRIVED, S.PENDING),
        (S.ON_HOLD, S.COMPLETED),
        (S.IN_PROGRESS, S.CANCELLED),
        (S.COMPLETED, S.IN_PROGRESS),
        (S.CANCELLED, S.SCHEDULED),
    ])
    def test_illegal_moves_rejected(self, current, target):
        assert not can_transition(current, target)
        with pytest.raises(ValidationError, match="Cannot move work order"):
            transition(current, target)

    def test_followup_goes_back_to_scheduling(self):
        status = transition(S.IN_PROGRESS, S.REQUIRES_FOLLOWUP)

        assert transition(status, S.SCHEDULED) == S.SCHEDULED

    def test_cannot_complete_while_clocked_in(self):
        """
        Scenario: technician taps Complete without clocking out
        Expected: rejected until the open session is closed
        """
        started = datetime(2026, 1, 10, 9, 0)
        open_entries = [LaborEntry(clock_in_at=started)]
        closed_entries = [LaborEntry(clock_in_at=started, clock_out_at=datetime(2026, 1, 10, 11, 0))]

        with pytest.raises(ValidationError, match="Clock out"):
            transition(S.IN_PROGRESS, S.COMPLETED, open_entries)
        assert transition(S.IN_PROGRESS, S.COMPLETED, closed_entries) == S.COMPLETED

    def test_accepts_api_codes(self):
        assert transition('en_route', 'ARRIVED') == S.ARRIVED

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            parse_status('LOST')


class TestNextStep:

    @pytest.mark.parametrize("current,expected", [
        (S.PENDING, S.EN_ROUTE),
        (S.SCHEDULED, S.EN_ROUTE),
        (S.EN_ROUTE, S.ARRIVED),
        (S.ARRIVED, S.IN_PROGRESS),
        (S.IN_PROGRESS, S.COMPLETED),
    ])
    def test_next_step_is_a_legal_move(self, current, expected):
        assert next_step(current) == expected
        assert can_transition(current, expected)

    def test_no_next_step_when_terminal(self):
        assert next_step(S.COMPLETED) is None
        assert next_step(S.CANCELLED) is None

    def test_every_status_has_a_label(self):
        assert set(STATUS_LABELS) == set(S)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
