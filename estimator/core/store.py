"""Element store, the ordered drawing of one wall surface."""

from __future__ import annotations
from collections.abc import Callable, Iterable, Iterator

from loguru import logger

from estimator.models import DrawingElement

Listener = Callable[[tuple[DrawingElement, ...]], None]


class ElementStore:
    """
    Ordered collection of a wall's drawing elements.

    Single source of truth for the estimator and for canvas persistence.
    Listeners are called synchronously with the new snapshot after
    every mutation.
    """

    def __init__(self, elements: Iterable[DrawingElement] = ()) -> None:
        self._elements: list[DrawingElement] = list(elements)
        self._listeners: list[Listener] = []

    @classmethod
    def from_canvas_data(cls, data: Iterable[DrawingElement | dict] | None) -> ElementStore:
        """Build a store from persisted canvas data (current or legacy schema)."""
        elements = [
            el if isinstance(el, DrawingElement) else DrawingElement.model_validate(el)
            for el in (data or [])
        ]
        return cls(elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[DrawingElement]:
        return iter(tuple(self._elements))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def append(self, element: DrawingElement) -> None:
        self._elements.append(element)
        self._notify()

    def remove(self, element_id: str) -> bool:
        """Remove the first element with `element_id`; returns False if absent."""
        for i, element in enumerate(self._elements):
            if element.id == element_id:
                del self._elements[i]
                self._notify()
                return True
        return False

    def clear(self) -> None:
        if not self._elements:
            return
        self._elements.clear()
        self._notify()

    def snapshot(self) -> tuple[DrawingElement, ...]:
        """Current elements in drawing order."""
        return tuple(self._elements)

    def get(self, element_id: str) -> DrawingElement | None:
        for element in self._elements:
            if element.id == element_id:
                return element
        return None

    def boundary_elements(self) -> list[DrawingElement]:
        """Line-like elements, the ones that outline the wall."""
        return [el for el in self._elements if el.kind.is_line]

    def option_ids(self) -> list[str]:
        """Distinct option ids in first-appearance order."""
        return list(dict.fromkeys(el.option_id for el in self._elements))

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
        logger.trace("Element store changed: {} element(s)", len(snapshot))
