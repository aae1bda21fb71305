"""Menu catalog."""
import logging
from typing import Dict, Iterable, List, Optional

from food_ordering.core.errors import MenuItemNotFoundError
from food_ordering.services.menu.base import MenuItem, MenuProvider

logger = logging.getLogger(__name__)


class MenuCatalog:
    """Read-only lookup of menu items, loaded once from a provider.

    The catalog owns the authoritative name and price of every item. After
    ``load`` it never changes, so lookups are synchronous and safe to share
    between concurrent requests.
    """

    def __init__(self, items: Optional[Iterable[MenuItem]] = None):
        self._items: Dict[int, MenuItem] = {}
        if items is not None:
            self._index(items)

    @classmethod
    async def load(cls, provider: MenuProvider) -> "MenuCatalog":
        """Build a catalog from a provider.

        A provider failure is logged and yields an empty catalog; the rest of
        the service keeps running without a menu.
        """
        try:
            items = await provider.load_items()
        except Exception as e:
            logger.error(
                f"Failed to load menu from {type(provider).__name__}: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            return cls()
        catalog = cls(items)
        logger.info(f"Menu catalog loaded - {len(catalog)} items")
        return catalog

    def _index(self, items: Iterable[MenuItem]) -> None:
        for item in items:
            if item.id in self._items:
                logger.warning(f"Duplicate menu item id {item.id}; keeping the last one")
            self._items[item.id] = item

    def __len__(self) -> int:
        return len(self._items)

    def list_all(self) -> List[MenuItem]:
        """All items, ascending id."""
        return [self._items[item_id] for item_id in sorted(self._items)]

    def find(self, item_id: int) -> Optional[MenuItem]:
        """Get an item by id, or None."""
        return self._items.get(item_id)

    def get(self, item_id: int) -> MenuItem:
        """Get an item by id, raising when it is unknown."""
        item = self.find(item_id)
        if item is None:
            raise MenuItemNotFoundError(item_id)
        return item

    def list_by_category(self, category: str) -> List[MenuItem]:
        """Items whose category matches exactly, ignoring case."""
        wanted = category.casefold()
        return [item for item in self.list_all() if item.category.casefold() == wanted]

    def list_categories(self) -> List[str]:
        """Distinct category labels, sorted."""
        return sorted({item.category for item in self._items.values()})
