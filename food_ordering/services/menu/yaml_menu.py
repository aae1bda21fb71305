"""YAML-backed menu provider."""
import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml

from food_ordering.services.menu.base import MenuItem, MenuProvider

logger = logging.getLogger(__name__)

DEFAULT_MENU_FILE = Path(__file__).parent / "data" / "menu.yaml"


class YamlMenuProvider(MenuProvider):
    """Menu provider reading a seed set from a YAML file."""

    def __init__(self, menu_file: Optional[Union[str, Path]] = None):
        """Initialize with optional menu file path."""
        if menu_file is None:
            menu_file = DEFAULT_MENU_FILE
        self.menu_file = Path(menu_file)

    async def load_items(self) -> List[MenuItem]:
        """Load menu items from the YAML file."""
        logger.debug(f"Loading menu seed from {self.menu_file}")
        with open(self.menu_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return [MenuItem(**item) for item in data.get("items", [])]
