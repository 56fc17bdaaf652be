"""
Abstract base classes for hub location algorithms.
Defines interfaces for neighborhood structures and optimizers.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import numpy as np
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution


class BaseNeighborhood(ABC):
    """
    Base class for VNS neighborhood structures.

    A neighborhood maps a solution to one random neighbor. Implementations
    must work on a copy: the incumbent passed in is never modified.
    """

    name = 'neighborhood'

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize neighborhood.

        Args:
            rng: Random generator; a fresh unseeded one if None
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.applications = 0
        self.degenerate = 0

    def apply(self, instance: HubInstance, solution: HubSolution) -> HubSolution:
        """
        Return a random neighbor of solution.

        Args:
            instance: Problem instance
            solution: Incumbent solution (left untouched)

        Returns:
            New feasible solution (possibly identical to the input)
        """
        self.applications += 1
        neighbor = self._move(instance, solution.copy())
        if neighbor is None:
            self.degenerate += 1
            return solution.copy()
        return neighbor

    @abstractmethod
    def _move(self, instance: HubInstance, candidate: HubSolution) -> Optional[HubSolution]:
        """
        Mutate candidate (already a private copy) in place.

        Returns:
            The mutated candidate, or None when the move cannot be applied
        """
        pass

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'applications': self.applications,
            'degenerate': self.degenerate,
        }

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class BaseOptimizer(ABC):
    """Base class for local search optimizers."""

    def __init__(self, instance: HubInstance):
        """
        Initialize optimizer.

        Args:
            instance: Problem instance
        """
        self.instance = instance

    @abstractmethod
    def optimize(self, solution: HubSolution) -> HubSolution:
        """
        Optimize solution.

        Args:
            solution: Solution to optimize

        Returns:
            Optimized solution
        """
        pass

    @abstractmethod
    def get_statistics(self) -> Dict[str, Any]:
        """
        Return optimizer statistics.

        Returns:
            Dictionary with optimizer statistics
        """
        pass
