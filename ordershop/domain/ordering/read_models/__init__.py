from .order_query import (
    OrderFlatRow,
    OrderItemRow,
    OrderLineItemDto,
    OrderQueryDto,
    OrderSimpleQueryDto,
)
from .projection import (
    OrderHeaderKey,
    attach_line_items,
    collect_order_ids,
    group_flat_rows,
    project_aggregate,
    project_aggregates,
    project_orders,
)

__all__ = [
    "OrderFlatRow",
    "OrderHeaderKey",
    "OrderItemRow",
    "OrderLineItemDto",
    "OrderQueryDto",
    "OrderSimpleQueryDto",
    "attach_line_items",
    "collect_order_ids",
    "group_flat_rows",
    "project_aggregate",
    "project_aggregates",
    "project_orders",
]
