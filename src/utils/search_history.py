"""Search history for the advisor directory.

Each entry records the free-text query, the filter criteria and when the
search ran. Re-running a search with the same criteria moves it to the front
instead of adding a duplicate.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .config import get_search_config
from .storage import KeyValueStore, load_json, save_json

logger = logging.getLogger(__name__)

SEARCH_HISTORY_KEY = "searchHistory"
MAX_SEARCH_HISTORY = 10


def build_search_params(criteria: Mapping[str, Any]) -> Dict[str, str]:
    """Flatten criteria into query-string parameters.

    Lists are comma-joined; empty values are dropped.
    """
    params = {}
    for key, value in criteria.items():
        if isinstance(value, (list, tuple)):
            if value:
                params[key] = ",".join(str(v) for v in value)
        elif value:
            params[key] = "true" if value is True else str(value)
    return params


class SearchHistory:
    def __init__(self, store: KeyValueStore, key: str = SEARCH_HISTORY_KEY, max_items: Optional[int] = None):
        self.store = store
        self.key = key
        if max_items is None:
            max_items = get_search_config().get("search_history_max", MAX_SEARCH_HISTORY)
        self.max_items = int(max_items)

    def entries(self) -> List[Dict[str, Any]]:
        stored = load_json(self.store, self.key, [])
        if not isinstance(stored, list):
            logger.error(f"Discarding malformed search history under '{self.key}'")
            self.store.remove(self.key)
            return []
        return [e for e in stored if isinstance(e, dict)]

    def add(
        self, query: str, criteria: Mapping[str, Any], timestamp: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Record a search at the front of the history."""
        timestamp = timestamp or datetime.now(timezone.utc)
        item = {
            "query": query or "",
            "criteria": json.loads(json.dumps(dict(criteria), default=str)),
            "timestamp": timestamp.isoformat(),
        }
        others = [e for e in self.entries() if e.get("criteria") != item["criteria"]]
        updated = [item, *others][: self.max_items]
        save_json(self.store, self.key, updated)
        return updated

    def remove(self, index: int) -> List[Dict[str, Any]]:
        history = self.entries()
        if 0 <= index < len(history):
            history = history[:index] + history[index + 1:]
            save_json(self.store, self.key, history)
        return history

    def clear(self) -> None:
        self.store.remove(self.key)
