"""Key-value persistence for per-visitor lists.

Components that remember things between page loads (recently viewed
advisors, search history) receive a ``KeyValueStore`` instead of reaching for
global state. Values are stored as JSON strings.
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class SessionStateStore(KeyValueStore):
    """Store backed by ``st.session_state``, namespaced under ``prefix``."""

    def __init__(self, state: Optional[MutableMapping[str, Any]] = None, prefix: str = "kv:"):
        if state is None:
            import streamlit as st

            state = st.session_state
        self._state = state
        self._prefix = prefix

    def get(self, key: str) -> Optional[str]:
        return self._state.get(self._prefix + key)

    def set(self, key: str, value: str) -> None:
        self._state[self._prefix + key] = value

    def remove(self, key: str) -> None:
        if self._prefix + key in self._state:
            del self._state[self._prefix + key]


def load_json(store: KeyValueStore, key: str, default: Any) -> Any:
    """Decode the JSON stored under ``key``.

    A corrupt value is logged and removed so it does not fail again on the next read.
    """
    raw = store.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.error(f"Error parsing stored value for '{key}': {e}")
        store.remove(key)
        return default


def save_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value, default=str))
