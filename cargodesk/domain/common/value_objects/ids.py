from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""

    value: int


@dataclass(frozen=True)
class CustomerId(EntityId):
    """Strongly-typed customer identifier."""

    value: int


@dataclass(frozen=True)
class WarehouseId(EntityId):
    """Strongly-typed warehouse identifier."""

    value: int


@dataclass(frozen=True)
class ShipmentId(EntityId):
    """Strongly-typed shipment identifier."""

    value: int


@dataclass(frozen=True)
class TrackingEventId(EntityId):
    """Strongly-typed tracking event identifier."""

    value: int


@dataclass(frozen=True)
class InvoiceId(EntityId):
    """Strongly-typed invoice identifier."""

    value: int


@dataclass(frozen=True)
class InvoiceItemId(EntityId):
    """Strongly-typed invoice item identifier."""

    value: int


@dataclass(frozen=True)
class PaymentId(EntityId):
    """Strongly-typed payment identifier."""

    value: int


@dataclass(frozen=True)
class CustomsDeclarationId(EntityId):
    """Strongly-typed customs declaration identifier."""

    value: int


@dataclass(frozen=True)
class CustomsItemId(EntityId):
    """Strongly-typed customs item identifier."""

    value: int


@dataclass(frozen=True)
class SupportTicketId(EntityId):
    """Strongly-typed support ticket identifier."""

    value: int


@dataclass(frozen=True)
class TicketReplyId(EntityId):
    """Strongly-typed ticket reply identifier."""

    value: int


@dataclass(frozen=True)
class NotificationId(EntityId):
    """Strongly-typed notification identifier."""

    value: int


@dataclass(frozen=True)
class DriverId(EntityId):
    """Strongly-typed driver identifier."""

    value: int


@dataclass(frozen=True)
class DeliveryRouteId(EntityId):
    """Strongly-typed delivery route identifier."""

    value: int


@dataclass(frozen=True)
class RouteStopId(EntityId):
    """Strongly-typed route stop identifier."""

    value: int
