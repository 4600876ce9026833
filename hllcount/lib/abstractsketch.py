from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, Optional
from hllcount.lib.hashing import Element

class AbstractSketch(ABC):
    """Base class for all sketch types."""

    @abstractmethod
    def add(self, element: Element, element_len: Optional[int] = None) -> None:
        """Add an element to the sketch."""
        pass

    @abstractmethod
    def add_batch(self, elements: Iterable[Element]) -> None:
        """Add multiple elements to the sketch.

        Args:
            elements: Elements to add to the sketch
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Estimate the number of distinct elements added."""
        pass

    @abstractmethod
    def merge(self, other: 'AbstractSketch') -> None:
        """Merge another sketch into this one."""
        pass

    def add_string(self, s: str) -> None:
        """Add a string to the sketch."""
        self.add(s)

    def add_int(self, value: int) -> None:
        """Add an integer to the sketch."""
        self.add(value)
