"""Constant Pool — append-only, insertion-ordered runtime values."""

from __future__ import annotations

import logging
from typing import Iterator

from .objects import Object

logger = logging.getLogger(__name__)


class ConstantPool:
    """Values addressed by their zero-based insertion index.

    There is no deduplication and no removal: two equal literals at two
    source positions occupy two slots, and an index stays valid for the
    rest of the compilation.  Entries are stored by reference, so the pool
    and any later holder share the same value object.
    """

    def __init__(self):
        self._values: list[Object] = []

    def add(self, value: Object) -> int:
        self._values.append(value)
        index = len(self._values) - 1
        logger.debug("constant[%d] = %s", index, value)
        return index

    def snapshot(self) -> tuple[Object, ...]:
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> Object:
        return self._values[index]

    def __iter__(self) -> Iterator[Object]:
        return iter(self._values)
