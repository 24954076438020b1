"""Category tree and its many-to-many link to items."""

from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

from .base import IdentifiedModel

if TYPE_CHECKING:
    from .item import Item


class CategoryItem(SQLModel, table=True):
    """Link table between categories and items."""

    __tablename__ = "category_item"

    category_id: int | None = Field(
        default=None, foreign_key="categories.id", primary_key=True
    )
    item_id: int | None = Field(default=None, foreign_key="items.id", primary_key=True)


class Category(IdentifiedModel, table=True):
    """Category table definition."""

    __tablename__ = "categories"

    name: str = Field(max_length=100)
    parent_id: int | None = Field(default=None, foreign_key="categories.id")

    # Relationships
    items: list["Item"] = Relationship(
        back_populates="categories", link_model=CategoryItem
    )
    parent: Optional["Category"] = Relationship(
        back_populates="children",
        sa_relationship_kwargs={"remote_side": "Category.id"},
    )
    children: list["Category"] = Relationship(back_populates="parent")

    def add_child_category(self, child: "Category") -> None:
        """Attach ``child`` under this category; both sides are updated."""
        self.children.append(child)

    def add_item(self, item: "Item") -> None:
        self.items.append(item)
