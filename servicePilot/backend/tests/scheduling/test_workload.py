import pytest

from app.db.models.orders import OrderStatus
from app.services.scheduling.types import TechnicianWorkload
from app.services.scheduling.workload import (
    offset_hours,
    aggregate_technician_workloads,
    suggest_support_technician,
)


class TestOffsetHours:
    def test_positive_passthrough(self):
        assert offset_hours(6.5) == 6.5

    def test_negative_clamped(self):
        assert offset_hours(-3) == 0.0

    def test_missing_is_zero(self):
        assert offset_hours(None) == 0.0


class TestAggregateTechnicianWorkloads:
    def test_groups_by_technician(self):
        orders = [
            {"assigned_technician": 1, "status": "pendiente", "hours": 4},
            {"assigned_technician": 1, "status": "en_proceso", "hours": 2.5},
            {"assigned_technician": 2, "status": "pendiente", "hours": 3},
        ]
        result = aggregate_technician_workloads(orders)
        assert result[1].current_orders == 2
        assert result[1].total_hours == 6.5
        assert result[2].current_orders == 1

    def test_skips_closed_and_unassigned(self):
        orders = [
            {"assigned_technician": 1, "status": "finalizada", "hours": 4},
            {"assigned_technician": 1, "status": "cancelada", "hours": 4},
            {"assigned_technician": None, "status": "pendiente", "hours": 4},
        ]
        assert aggregate_technician_workloads(orders) == {}

    def test_missing_hours_count_as_zero(self):
        result = aggregate_technician_workloads(
            [{"assigned_technician": 3, "status": "pendiente", "hours": None}]
        )
        assert result[3].current_orders == 1
        assert result[3].total_hours == 0

    def test_accepts_order_status_enums(self):
        orders = [
            {"assigned_technician": 1, "status": OrderStatus.CANCELADA, "hours": 4},
            {"assigned_technician": 1, "status": OrderStatus.EN_CAMINO, "hours": 2},
        ]
        result = aggregate_technician_workloads(orders)
        assert result[1].current_orders == 1
        assert result[1].total_hours == 2


class TestSuggestSupportTechnician:
    def test_short_job_not_suggested(self):
        result = suggest_support_technician(1, 6, [2, 3], {})
        assert result.suggested is False
        assert "menos de 8 horas" in result.reason

    def test_long_job_picks_least_loaded(self):
        workloads = {
            2: TechnicianWorkload(technician_id=2, total_hours=10),
            3: TechnicianWorkload(technician_id=3, total_hours=4),
        }
        result = suggest_support_technician(1, 20, [1, 2, 3], workloads)
        assert result.suggested is True
        assert result.technician_id == 3

    def test_long_job_never_suggests_primary(self):
        result = suggest_support_technician(1, 20, [1], {})
        assert result.suggested is False

    def test_ties_broken_by_id(self):
        result = suggest_support_technician(1, 20, [5, 4], {})
        assert result.technician_id == 4

    def test_overloaded_primary_gets_light_helper(self):
        workloads = {
            1: TechnicianWorkload(technician_id=1, total_hours=25),
            2: TechnicianWorkload(technician_id=2, total_hours=16),
            3: TechnicianWorkload(technician_id=3, total_hours=12),
        }
        result = suggest_support_technician(1, 10, [1, 2, 3], workloads)
        assert result.suggested is True
        assert result.technician_id == 3
        assert "25h" in result.reason

    def test_overloaded_primary_without_light_helpers(self):
        workloads = {
            1: TechnicianWorkload(technician_id=1, total_hours=25),
            2: TechnicianWorkload(technician_id=2, total_hours=18),
        }
        result = suggest_support_technician(1, 10, [2], workloads)
        assert result.suggested is False

    def test_medium_job_normal_load(self):
        workloads = {1: TechnicianWorkload(technician_id=1, total_hours=5)}
        result = suggest_support_technician(1, 12, [2, 3], workloads)
        assert result.suggested is False
        assert result.technician_id is None

