"""
Ordering entities.

Importing this package registers every table with SQLModel's metadata, which
the mapper needs before string relationship targets can be resolved.
"""

from .category import Category, CategoryItem
from .delivery import Delivery
from .item import Item
from .member import Member
from .order import Order, OrderItem

__all__ = [
    "Category",
    "CategoryItem",
    "Delivery",
    "Item",
    "Member",
    "Order",
    "OrderItem",
]
