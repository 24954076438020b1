"""Item catalogue maintenance."""

from ordershop.core.observability import get_logger, monitor_operation
from ordershop.domain.ordering.entities import Item

from .base_service import ApplicationServiceBase

logger = get_logger(__name__)


class ItemService(ApplicationServiceBase):
    """Creates, updates and lists items."""

    @monitor_operation("save_item")
    def save_item(self, item: Item) -> int:
        """
        Persist a new item or merge a detached one.

        Returns:
            The item's id
        """
        with self._uow_factory() as uow:
            saved = uow.items.save(item)
            item_id = saved.id

        logger.info("Item saved", item_id=item_id, kind=item.kind.value)
        return item_id

    @monitor_operation("update_item")
    def update_item(
        self, item_id: int, name: str, price: int, stock_quantity: int
    ) -> None:
        """
        Change an item's details on the managed entity; the commit writes them.

        Raises:
            EntityNotFoundError: If no item has this id
            ValidationError: If price or stock is negative
        """
        with self._uow_factory() as uow:
            item = uow.items.get_by_id_required(item_id)
            item.change_details(name, price, stock_quantity)

    def find_items(self) -> list[Item]:
        with self._uow_factory() as uow:
            return uow.items.find_all()

    def find_one(self, item_id: int) -> Item:
        with self._uow_factory() as uow:
            return uow.items.get_by_id_required(item_id)
