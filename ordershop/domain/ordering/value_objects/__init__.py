from .address import Address
from .enums import DeliveryStatus, FetchStrategy, ItemKind, OrderStatus
from .order_search import OrderSearch

__all__ = [
    "Address",
    "DeliveryStatus",
    "FetchStrategy",
    "ItemKind",
    "OrderSearch",
    "OrderStatus",
]
