"""
Technician workload utilities.
Turns committed work into a starting offset and suggests support technicians.
"""

from typing import Iterable, Mapping, Optional

from app.db.models.orders import CLOSED_ORDER_STATUSES

from .types import TechnicianWorkload, SupportSuggestion


SUPPORT_MIN_HOURS = 8  # below this, never suggest support
SUPPORT_ALWAYS_HOURS = 16  # above this, always suggest support
PRIMARY_OVERLOAD_HOURS = 20
SUPPORT_CANDIDATE_MAX_HOURS = 15


def offset_hours(workload_snapshot: Optional[float]) -> float:
    """Backlog to burn off before new work starts. Missing or negative means none."""
    if workload_snapshot is None or workload_snapshot < 0:
        return 0.0
    return float(workload_snapshot)


def aggregate_technician_workloads(orders: Iterable[Mapping]) -> dict[int, TechnicianWorkload]:
    """
    Group unfinished orders by assigned technician.

    Each order mapping needs `assigned_technician`, `status` and `hours`.
    Orders without a technician or in a closed state are ignored.
    """
    workloads: dict[int, TechnicianWorkload] = {}

    for order in orders:
        technician_id = order.get("assigned_technician")
        if technician_id is None or order.get("status") in CLOSED_ORDER_STATUSES:
            continue

        workload = workloads.setdefault(technician_id, TechnicianWorkload(technician_id=technician_id))
        workload.current_orders += 1
        workload.total_hours += order.get("hours") or 0

    return workloads


def _by_load(candidates: Iterable[int], workloads: Mapping[int, TechnicianWorkload]) -> list[int]:
    # stable on technician id for equal loads
    def load(technician_id: int) -> float:
        workload = workloads.get(technician_id)
        return workload.total_hours if workload else 0.0

    return sorted(candidates, key=lambda t: (load(t), t))


def suggest_support_technician(
    primary_technician_id: int,
    total_hours: float,
    candidate_ids: Iterable[int],
    workloads: Mapping[int, TechnicianWorkload],
) -> SupportSuggestion:
    """
    Decide whether an order needs a support technician and pick the least loaded one.

    - under 8h: never
    - over 16h: always, if anyone else is available
    - otherwise only when the primary already carries more than 20h, choosing
      among candidates under 15h
    """
    if total_hours < SUPPORT_MIN_HOURS:
        return SupportSuggestion(
            suggested=False,
            reason="El trabajo requiere menos de 8 horas, no se necesita apoyo",
        )

    others = [t for t in candidate_ids if t != primary_technician_id]

    if total_hours > SUPPORT_ALWAYS_HOURS:
        ranked = _by_load(others, workloads)
        if ranked:
            return SupportSuggestion(
                suggested=True,
                technician_id=ranked[0],
                reason=(
                    f"El trabajo requiere {total_hours:g} horas. "
                    "Se recomienda apoyo para reducir tiempo de entrega"
                ),
            )

    primary = workloads.get(primary_technician_id)
    if primary and primary.total_hours > PRIMARY_OVERLOAD_HOURS:
        light = [
            t for t in others
            if (workloads[t].total_hours if t in workloads else 0) < SUPPORT_CANDIDATE_MAX_HOURS
        ]
        ranked = _by_load(light, workloads)
        if ranked:
            return SupportSuggestion(
                suggested=True,
                technician_id=ranked[0],
                reason=(
                    f"El técnico principal tiene alta carga de trabajo ({primary.total_hours:g}h). "
                    "Se recomienda apoyo"
                ),
            )

    return SupportSuggestion(
        suggested=False,
        reason="No se requiere técnico de apoyo para este trabajo",
    )
