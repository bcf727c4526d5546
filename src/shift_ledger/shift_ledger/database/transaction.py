from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")


class TransactionManager(Protocol):
    """Executes ``work(tx)`` atomically; ``tx`` is handed to repository write methods."""

    def run(self, work: Callable[[Any], T]) -> T:
        raise NotImplementedError
