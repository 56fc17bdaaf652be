"""
Allocation local search for hub location.
First-improvement Shift moves evaluated with exact O(n) deltas.
"""

from typing import Any, Dict, Optional
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution, allocation_delta
from hubvns.algorithms.base import BaseOptimizer
from config import VNS_CONFIG


class ShiftLocalSearch(BaseOptimizer):
    """Reallocate non-hub nodes while any single reallocation lowers the cost."""

    def __init__(self, instance: HubInstance, max_iterations: Optional[int] = None,
                 epsilon: Optional[float] = None):
        """
        Initialize local search.

        Args:
            instance: Problem instance
            max_iterations: Maximum improving moves per call
            epsilon: Minimum cost decrease for a move to count
        """
        super().__init__(instance)
        self.max_iterations = (VNS_CONFIG['local_search_iterations']
                               if max_iterations is None else max_iterations)
        self.epsilon = VNS_CONFIG['improvement_epsilon'] if epsilon is None else epsilon
        self.calls = 0
        self.moves = 0

    def optimize(self, solution: HubSolution) -> HubSolution:
        """
        Optimize solution by first-improvement reallocation.

        Deterministic: nodes and hubs are scanned in index order and the scan
        restarts after every applied move.

        Args:
            solution: Starting solution (not modified)

        Returns:
            Locally improved copy
        """
        self.calls += 1
        current = solution.copy()
        iteration = 0

        while iteration < self.max_iterations:
            move = self._first_improving_move(current)
            if move is None:
                break

            node, hub = move
            current.assign(node, hub)
            iteration += 1

        self.moves += iteration
        return current

    def _first_improving_move(self, solution: HubSolution):
        hubs = sorted(solution.hubs)
        if len(hubs) < 2:
            return None

        for node in solution.non_hub_nodes():
            current_hub = solution.hub_of(node)
            for hub in hubs:
                if hub == current_hub:
                    continue
                if allocation_delta(self.instance, solution, node, hub) < -self.epsilon:
                    return node, hub

        return None

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'calls': self.calls,
            'moves': self.moves,
            'max_iterations': self.max_iterations,
        }
