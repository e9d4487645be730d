"""Recently viewed advisors, newest first."""
import logging
from typing import Any, Dict, List, Optional

from .config import get_search_config
from .storage import KeyValueStore, load_json, save_json

logger = logging.getLogger(__name__)

RECENTLY_VIEWED_KEY = "recentlyViewedAdvisors"
MAX_RECENT_ADVISORS = 10


class RecentlyViewedAdvisors:
    """Bounded most-recent-first list of advisor records, keyed by ``id``."""

    def __init__(self, store: KeyValueStore, key: str = RECENTLY_VIEWED_KEY, max_items: Optional[int] = None):
        self.store = store
        self.key = key
        if max_items is None:
            max_items = get_search_config().get("recently_viewed_max", MAX_RECENT_ADVISORS)
        self.max_items = int(max_items)

    def items(self) -> List[Dict[str, Any]]:
        stored = load_json(self.store, self.key, [])
        if not isinstance(stored, list):
            logger.error(f"Discarding malformed recently viewed list under '{self.key}'")
            self.store.remove(self.key)
            return []
        return [a for a in stored if isinstance(a, dict)]

    def add(self, advisor: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Move ``advisor`` to the front, dropping the oldest beyond ``max_items``."""
        advisor_id = advisor.get("id")
        remaining = [a for a in self.items() if a.get("id") != advisor_id]
        updated = [advisor, *remaining][: self.max_items]
        save_json(self.store, self.key, updated)
        return updated

    def remove(self, advisor_id: Any) -> List[Dict[str, Any]]:
        updated = [a for a in self.items() if a.get("id") != advisor_id]
        save_json(self.store, self.key, updated)
        return updated

    def clear(self) -> None:
        self.store.remove(self.key)

    def __len__(self) -> int:
        return len(self.items())
