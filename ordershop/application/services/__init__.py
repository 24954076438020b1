from .base_service import ApplicationServiceBase
from .item_service import ItemService
from .member_service import MemberService
from .order_service import OrderService

__all__ = ["ApplicationServiceBase", "ItemService", "MemberService", "OrderService"]
