"""
Engine interface definitions.

This module defines the abstract distance capability consumed by the
approximate-matching engine.
"""

from abc import ABC, abstractmethod


class DistanceMeasure(ABC):
    """Interface for a bounded edit-distance computation."""

    name: str = ""

    @abstractmethod
    def distance(self, s1: str, s2: str, max_distance: int) -> int:
        """
        Compute the distance between two strings under a budget.

        Args:
            s1: First string
            s2: Second string
            max_distance: Largest distance the caller cares about

        Returns:
            The exact distance when it is <= max_distance; otherwise any
            value > max_distance (need not be exact)
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))
