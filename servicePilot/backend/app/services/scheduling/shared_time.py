"""
Shared-time resolution.

Shared items (e.g. a test running unattended) overlap each other up to a
concurrency cap, so only the longest one counts towards elapsed time.
Exclusive items always add up.
"""

from .errors import InvalidOrderItemError
from .types import OrderItem, SharedTimeResolution


MAX_CONCURRENT_SHARED = 3


def validate_order_items(items: list[OrderItem]) -> None:
    """Raise InvalidOrderItemError for negative hours or quantities."""
    for item in items:
        if item.estimated_hours < 0:
            raise InvalidOrderItemError(
                f"Item {item.id} has negative estimated hours ({item.estimated_hours})"
            )
        if item.quantity < 0:
            raise InvalidOrderItemError(
                f"Item {item.id} has negative quantity ({item.quantity})"
            )


def resolve(items: list[OrderItem], max_concurrent: int = MAX_CONCURRENT_SHARED) -> SharedTimeResolution:
    """
    Split pending work into exclusive and shared hours.

    Done items are ignored. If more than `max_concurrent` shared items exist,
    the largest ones run concurrently and the rest are treated as sequential
    (added to exclusive hours), and can_use_shared_time is False.

    Raises:
        InvalidOrderItemError: an item with negative hours or quantity
    """
    validate_order_items(items)

    pending = [item for item in items if not item.is_done]
    shared = [item for item in pending if item.shared_time]
    exclusive = [item for item in pending if not item.shared_time]

    exclusive_hours = sum(item.total_hours for item in exclusive)

    # largest first; sort is stable so ties keep input order
    shared_sorted = sorted(shared, key=lambda item: item.total_hours, reverse=True)
    concurrent = shared_sorted[:max_concurrent]
    overflow = shared_sorted[max_concurrent:]

    exclusive_hours += sum(item.total_hours for item in overflow)
    shared_hours = max((item.total_hours for item in concurrent), default=0)

    return SharedTimeResolution(
        exclusive_hours=float(exclusive_hours),
        shared_hours=float(shared_hours),
        shared_services_count=len(concurrent),
        can_use_shared_time=not overflow,
    )
