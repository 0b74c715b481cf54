"""
Errors raised by the delivery scheduling engine.
"""


class DeliveryCalculationError(Exception):
    pass


class InvalidScheduleError(DeliveryCalculationError):
    """Schedule has no work days, an empty window, or a break that eats the whole day."""
    pass


class InvalidSupportPercentageError(DeliveryCalculationError):
    pass


class InvalidSupportTechnicianError(DeliveryCalculationError):
    """Support technician is the primary one or was selected twice."""
    pass


class WorkloadFetchTimeout(DeliveryCalculationError):
    pass


class CalendarWalkLimitError(DeliveryCalculationError):
    """The calendar walk hit its day bound without consuming all hours."""
    pass


class InvalidOrderItemError(DeliveryCalculationError):
    """Order item with negative estimated hours or quantity."""
    pass
