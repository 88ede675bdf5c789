from __future__ import annotations
import itertools
import logging
from typing import Any, Dict, Hashable, Iterator, Tuple

logger = logging.getLogger(__name__)

_generations = itertools.count()


class AnnotationCache:
    """
    Per-session side-table of computed node attributes (ignored flag, text length,
    container flags, score).

    Entries live in a table owned by the cache, never on the nodes themselves.
    `reset_session` drops the whole table and takes a fresh generation id, so every
    previously cached value becomes unobservable at once.
    """

    def __init__(self):
        self.generation = next(_generations)
        self._entries: Dict[Hashable, Dict[str, Any]] = {}

    def get(self, prop: str, node: Hashable, default: Any = None) -> Any:
        entry = self._entries.get(node)
        if entry is None:
            return default
        return entry.get(prop, default)

    def set(self, prop: str, value: Any, node: Hashable) -> None:
        self._entries.setdefault(node, {})[prop] = value

    def has(self, prop: str, node: Hashable) -> bool:
        entry = self._entries.get(node)
        return entry is not None and prop in entry

    def items(self, prop: str) -> Iterator[Tuple[Hashable, Any]]:
        """(node, value) for every node annotated with `prop`."""
        for node, entry in self._entries.items():
            if prop in entry:
                yield node, entry[prop]

    def reset_session(self) -> None:
        logger.debug("Resetting annotation session %d (%d annotated nodes)", self.generation, len(self._entries))
        self.generation = next(_generations)
        self._entries = {}

    def __len__(self) -> int:
        return len(self._entries)
