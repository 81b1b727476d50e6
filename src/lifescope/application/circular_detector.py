"""Application layer - Circular dependency detection."""

import threading
from contextlib import contextmanager
from typing import Iterator, List, Type

from lifescope.domain import CircularDependencyError


class CircularDependencyDetector:
    """Tracks the contracts currently being built by one resolver.

    The stack lives in thread-local storage, so concurrent resolutions on
    different threads do not see each other's contracts.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _get_stack(self) -> List[Type]:
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    @contextmanager
    def track(self, contract: Type) -> Iterator[None]:
        """Mark ``contract`` as in progress for the duration of the block.

        Raises:
            CircularDependencyError: If ``contract`` is already being built.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> with detector.track(ServiceA):
            ...     with detector.track(ServiceA):  # Raises CircularDependencyError
            ...         pass
        """
        stack = self._get_stack()
        if contract in stack:
            cycle = stack[stack.index(contract) :] + [contract]
            raise CircularDependencyError(cycle)

        stack.append(contract)
        try:
            yield
        finally:
            stack.pop()

    @property
    def depth(self) -> int:
        """Number of contracts currently being built on this thread."""
        return len(self._get_stack())
