"""Domain enums for ordering."""

from enum import Enum


class OrderStatus(str, Enum):
    """Order status enumeration."""

    ORDER = "ORDER"
    CANCEL = "CANCEL"

    @property
    def is_terminal(self) -> bool:
        """Check if order status is terminal (cannot transition further)."""
        return self == OrderStatus.CANCEL

    def can_transition_to(self, target_status: "OrderStatus") -> bool:
        """Check if order can transition from current status to target status."""
        valid_transitions = {
            OrderStatus.ORDER: {OrderStatus.CANCEL},
            OrderStatus.CANCEL: set(),  # Terminal state
        }
        return target_status in valid_transitions.get(self, set())


class DeliveryStatus(str, Enum):
    """Delivery status enumeration."""

    READY = "READY"
    COMP = "COMP"


class ItemKind(str, Enum):
    """Discriminator for the sellable item variants stored in the items table."""

    BOOK = "B"


class FetchStrategy(str, Enum):
    """
    Physical plan used to load Order aggregates.

    Each member is a distinct performance trade-off; callers pick one
    explicitly for the access pattern that follows the load.
    """

    LAZY = "lazy"  # 1 + N per association touched
    TO_ONE_JOIN = "to_one_join"  # member + delivery joined, items lazy, pageable
    FULL_JOIN = "full_join"  # whole graph in one statement, not pageable
    BATCHED = "batched"  # to-one join + IN batches for items, pageable

    @property
    def supports_pagination(self) -> bool:
        """Whether offset/limit keep their meaning under this strategy."""
        return self != FetchStrategy.FULL_JOIN
