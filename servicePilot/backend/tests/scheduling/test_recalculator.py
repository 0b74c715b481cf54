import asyncio
import threading
import time as time_module
from datetime import time

from sqlalchemy.exc import OperationalError

from app.services.scheduling.types import OrderItem, DeliveryRequest, ScheduleResolution, SupportTechnicianEntry
from app.services.scheduling.recalculator import DeliveryRecalculator
from app.services.scheduling.service import CALCULATION_FAILED_MESSAGE, SCHEDULE_UNAVAILABLE_MESSAGE

from conftest import at, weekday_schedule


def make_request(hours: float, technician_id: int = 1, **kwargs) -> DeliveryRequest:
    return DeliveryRequest(
        order_items=[OrderItem(id=1, estimated_hours=hours)],
        technician_id=technician_id,
        creation_instant=at(0, 8),
        **kwargs,
    )


def no_workload(technician_id, exclude_order_id):
    return 0


class TestRequestIds:
    def test_ids_increase(self, schedule_source):
        recalculator = DeliveryRecalculator(schedule_source, no_workload, debounce_seconds=0)
        first = recalculator.next_request_id()
        second = recalculator.next_request_id()
        assert second > first
        assert recalculator.is_current(second)
        assert not recalculator.is_current(first)


class TestRecalculate:
    def test_applies_result(self, schedule_source):
        recalculator = DeliveryRecalculator(schedule_source, no_workload, debounce_seconds=0)
        calculation = asyncio.run(recalculator.recalculate(make_request(2)))
        assert calculation.estimate.delivery_time == time(10, 0)
        assert recalculator.last_estimate == calculation.estimate
        assert recalculator.error is None

    def test_debounce_drops_superseded_request(self, schedule_source):
        recalculator = DeliveryRecalculator(schedule_source, no_workload, debounce_seconds=0.05)

        async def scenario():
            first = asyncio.create_task(recalculator.recalculate(make_request(2)))
            await asyncio.sleep(0)
            second = asyncio.create_task(recalculator.recalculate(make_request(5)))
            return await first, await second

        first, second = asyncio.run(scenario())
        assert first is None
        assert second.estimate.delivery_time == time(13, 0)
        assert recalculator.last_estimate.delivery_time == time(13, 0)

    def test_stale_result_never_overwrites_newer(self, schedule_source):
        # technician 1's workload query is slow, technician 2's is instant
        def workload(technician_id, exclude_order_id):
            if technician_id == 1:
                time_module.sleep(0.2)
            return 0

        recalculator = DeliveryRecalculator(schedule_source, workload, debounce_seconds=0, workload_timeout=2)

        async def scenario():
            slow = asyncio.create_task(recalculator.recalculate(make_request(2, technician_id=1)))
            await asyncio.sleep(0.05)
            fast = asyncio.create_task(recalculator.recalculate(make_request(6, technician_id=2)))
            return await fast, await slow

        fast, slow = asyncio.run(scenario())
        assert slow is None
        assert fast.estimate.delivery_time == time(14, 0)
        assert recalculator.last_estimate.delivery_time == time(14, 0)

    def test_workload_timeout_degrades(self, schedule_source):
        def hung(technician_id, exclude_order_id):
            time_module.sleep(0.3)
            return 50

        recalculator = DeliveryRecalculator(schedule_source, hung, debounce_seconds=0, workload_timeout=0.05)
        calculation = asyncio.run(recalculator.recalculate(make_request(2)))
        assert calculation.workload_degraded is True
        assert calculation.workload_hours == 0
        assert calculation.estimate.delivery_time == time(10, 0)

    def test_failure_keeps_last_estimate(self, schedule_source):
        recalculator = DeliveryRecalculator(schedule_source, no_workload, debounce_seconds=0)
        ok = asyncio.run(recalculator.recalculate(make_request(2)))
        failed = asyncio.run(recalculator.recalculate(make_request(100000)))

        assert failed.estimate is None
        assert recalculator.error == CALCULATION_FAILED_MESSAGE
        assert recalculator.last_estimate == ok.estimate
        assert recalculator.last_calculation is failed

    def test_invalid_support_reported_not_raised(self, schedule_source):
        recalculator = DeliveryRecalculator(schedule_source, no_workload, debounce_seconds=0)
        request = make_request(2, support_technicians=[
            SupportTechnicianEntry(technician_id=2, reduction_percentage=80),
        ])
        calculation = asyncio.run(recalculator.recalculate(request))
        assert calculation.estimate is None
        assert "80" in recalculator.error

    def test_negative_item_reported_not_raised(self, schedule_source):
        recalculator = DeliveryRecalculator(schedule_source, no_workload, debounce_seconds=0)
        ok = asyncio.run(recalculator.recalculate(make_request(2)))
        calculation = asyncio.run(recalculator.recalculate(make_request(-2)))
        assert calculation.estimate is None
        assert "negative" in recalculator.error
        assert recalculator.last_estimate == ok.estimate

    def test_schedule_store_failure_uses_default(self):
        def broken(technician_id):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        recalculator = DeliveryRecalculator(broken, no_workload, debounce_seconds=0)
        calculation = asyncio.run(recalculator.recalculate(make_request(2)))

        assert calculation.used_default_schedule is True
        assert recalculator.error == SCHEDULE_UNAVAILABLE_MESSAGE
        # default Mon-Fri 08:00-16:00
        assert calculation.estimate.delivery_time == time(10, 0)
        assert recalculator.last_estimate == calculation.estimate

    def test_schedule_lookup_runs_off_the_event_loop(self):
        lookup_threads = []

        def source(technician_id):
            lookup_threads.append(threading.get_ident())
            return ScheduleResolution(schedule=weekday_schedule())

        recalculator = DeliveryRecalculator(source, no_workload, debounce_seconds=0)

        async def scenario():
            calculation = await recalculator.recalculate(make_request(2))
            return calculation, threading.get_ident()

        calculation, loop_thread = asyncio.run(scenario())
        assert calculation.estimate is not None
        assert lookup_threads
        assert loop_thread not in lookup_threads
