from .base import BaseRepository
from .category_repository import CategoryRepository
from .fetch_plan import FetchPlan
from .item_repository import ItemRepository
from .member_repository import MemberRepository
from .order_query_repository import OrderQueryRepository
from .order_repository import OrderRepository
from .order_simple_query_repository import OrderSimpleQueryRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "FetchPlan",
    "ItemRepository",
    "MemberRepository",
    "OrderQueryRepository",
    "OrderRepository",
    "OrderSimpleQueryRepository",
]
