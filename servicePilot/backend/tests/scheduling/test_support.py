import pytest
from datetime import time

from app.services.scheduling.types import SupportTechnicianEntry, WorkSchedule
from app.services.scheduling.errors import (
    InvalidSupportPercentageError,
    InvalidSupportTechnicianError,
)
from app.services.scheduling.support import (
    apply_support_reduction,
    combined_reduction_factor,
    validate_support_technicians,
    governing_schedule,
    has_mixed_schedules,
)


def helper(technician_id: int, pct: int, schedule=None) -> SupportTechnicianEntry:
    return SupportTechnicianEntry(technician_id=technician_id, reduction_percentage=pct, schedule=schedule)


class TestApplySupportReduction:
    def test_no_support(self):
        assert apply_support_reduction(10, []) == 10

    def test_single_support(self):
        assert apply_support_reduction(10, [helper(2, 20)]) == pytest.approx(8.0)

    def test_reductions_compound(self):
        # 50% of what is left after the first 50%
        assert apply_support_reduction(10, [helper(2, 50), helper(3, 50)]) == pytest.approx(2.5)

    def test_order_does_not_matter(self):
        a = apply_support_reduction(7, [helper(2, 20), helper(3, 10)])
        b = apply_support_reduction(7, [helper(3, 10), helper(2, 20)])
        assert a == pytest.approx(b)

    def test_never_reaches_zero(self):
        many = [helper(i, 50) for i in range(2, 22)]
        assert apply_support_reduction(1, many) > 0

    def test_adding_support_never_increases_hours(self):
        base = apply_support_reduction(12, [helper(2, 15)])
        more = apply_support_reduction(12, [helper(2, 15), helper(3, 1)])
        assert more < base

    def test_combined_factor(self):
        assert combined_reduction_factor([helper(2, 20), helper(3, 50)]) == pytest.approx(0.4)


class TestValidateSupportTechnicians:
    @pytest.mark.parametrize("pct", [1, 25, 50])
    def test_bounds_accepted(self, pct):
        validate_support_technicians([helper(2, pct)])

    @pytest.mark.parametrize("pct", [0, 51, -5, 100])
    def test_out_of_range_rejected(self, pct):
        with pytest.raises(InvalidSupportPercentageError):
            apply_support_reduction(10, [helper(2, pct)])

    def test_duplicate_rejected(self):
        with pytest.raises(InvalidSupportTechnicianError):
            validate_support_technicians([helper(2, 10), helper(2, 20)])

    def test_primary_rejected(self):
        with pytest.raises(InvalidSupportTechnicianError):
            validate_support_technicians([helper(1, 10)], primary_technician_id=1)


class TestGoverningSchedule:
    def test_primary_always_governs(self, schedule):
        night = WorkSchedule(work_days={0, 6}, start_time=time(18, 0), end_time=time(23, 0))
        assert governing_schedule(schedule, [helper(2, 20, night)]) is schedule

    def test_mixed_schedules_detected(self, schedule):
        night = WorkSchedule(work_days={0, 6}, start_time=time(18, 0), end_time=time(23, 0))
        assert has_mixed_schedules(schedule, [helper(2, 20, night)]) is True

    def test_same_or_missing_schedule_not_mixed(self, schedule):
        same = WorkSchedule(work_days={1, 2, 3, 4, 5}, start_time=time(8, 0), end_time=time(16, 0))
        assert has_mixed_schedules(schedule, [helper(2, 20, same), helper(3, 10)]) is False
