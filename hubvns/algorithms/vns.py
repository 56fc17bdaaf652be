"""
Variable Neighborhood Search engine for hub location.

Loop (k starts at the first neighborhood):
1. SHAKE: apply neighborhood N_k to the best solution
2. LOCAL SEARCH: improve the shaken solution by reallocation moves
3. MOVE OR NOT: strictly better -> new best, k = first; else k = next
4. WRAP: past the last neighborhood, k returns to the first

The engine only stops on its stop condition (deadline, stop event or
iteration budget), never because the neighborhoods are exhausted.
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional, Sequence
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution
from hubvns.algorithms.base import BaseNeighborhood, BaseOptimizer
from hubvns.algorithms.local_search import ShiftLocalSearch
from hubvns.core.exceptions import InvalidConfigurationError
from hubvns.core.validators import ConfigValidator
from config import VNS_CONFIG

logger = logging.getLogger(__name__)


class VariableNeighborhoodSearch:
    """Basic VNS with first-improvement neighborhood reset."""

    def __init__(self,
                 instance: HubInstance,
                 neighborhoods: Sequence[BaseNeighborhood],
                 local_search: Optional[BaseOptimizer] = None,
                 config: Optional[Dict] = None):
        """
        Initialize VNS engine.

        Args:
            instance: Problem instance (read-only)
            neighborhoods: Ordered neighborhoods N_1..N_k (escalation order)
            local_search: Optimizer run after each shake (ShiftLocalSearch by default)
            config: VNS configuration
        """
        if not neighborhoods:
            raise InvalidConfigurationError(
                parameter='neighborhoods',
                value=len(neighborhoods),
                expected="at least one neighborhood"
            )

        self.instance = instance
        self.neighborhoods = list(neighborhoods)
        self.config = config or VNS_CONFIG.copy()
        ConfigValidator.validate_vns_config(self.config)

        self.local_search = local_search or ShiftLocalSearch(
            instance,
            max_iterations=self.config['local_search_iterations'],
            epsilon=self.config['improvement_epsilon']
        )
        self.log_interval = self.config['log_interval']

        self.best: Optional[HubSolution] = None
        self.k = 0
        self.iteration = 0
        self.history: List[float] = []
        self.improvements: List[Dict[str, Any]] = []
        self.execution_time = 0.0

    def run(self,
            initial: HubSolution,
            deadline: Optional[float] = None,
            stop_event: Optional[threading.Event] = None,
            max_iterations: Optional[int] = None) -> HubSolution:
        """
        Run VNS from an initial solution.

        Args:
            initial: Feasible starting solution (copied, not modified)
            deadline: Absolute time.monotonic() value at which to stop
            stop_event: External cancellation signal
            max_iterations: Iteration budget (wall-clock independent)

        Returns:
            Best solution found
        """
        if deadline is None and stop_event is None and max_iterations is None:
            raise InvalidConfigurationError(
                parameter='stop_condition',
                value=None,
                expected="deadline, stop_event or max_iterations"
            )

        start_time = time.monotonic()
        self.best = initial.copy()
        best_cost = self.best.get_cost(self.instance)
        initial_cost = best_cost
        self.k = 0
        self.iteration = 0
        self.history = []
        self.improvements = []

        logger.info(f"VNS started: initial cost={initial_cost:.4f}, "
                    f"hubs={len(self.best.hubs)}, neighborhoods={len(self.neighborhoods)}")

        while not self._should_stop(deadline, stop_event, max_iterations):
            neighborhood = self.neighborhoods[self.k]

            # 1. Shake
            shaken = neighborhood.apply(self.instance, self.best)

            # 2. Local search
            candidate = self.local_search.optimize(shaken)
            candidate_cost = candidate.get_cost(self.instance)

            # 3. Move or not (ties are not improvements)
            if candidate_cost < best_cost:
                self.best = candidate
                best_cost = candidate_cost
                self.improvements.append({
                    'iteration': self.iteration,
                    'neighborhood': neighborhood.name,
                    'k': self.k,
                    'cost': best_cost,
                })
                logger.debug(f"Iter {self.iteration}: new best {best_cost:.4f} "
                             f"via {neighborhood.name} ({len(self.best.hubs)} hubs)")
                self.k = 0
            else:
                self.k += 1
                # 4. Wrap
                if self.k >= len(self.neighborhoods):
                    self.k = 0

            self.history.append(best_cost)
            self.iteration += 1

            if self.iteration % self.log_interval == 0:
                logger.info(f"Iter {self.iteration}: best={best_cost:.4f}, "
                            f"improvements={len(self.improvements)}")

        self.execution_time = time.monotonic() - start_time
        logger.info(f"VNS finished in {self.execution_time:.2f}s: "
                    f"{self.iteration} iterations, {len(self.improvements)} improvements, "
                    f"cost {initial_cost:.4f} -> {best_cost:.4f}")

        return self.best

    def _should_stop(self, deadline: Optional[float],
                     stop_event: Optional[threading.Event],
                     max_iterations: Optional[int]) -> bool:
        if max_iterations is not None and self.iteration >= max_iterations:
            return True
        if stop_event is not None and stop_event.is_set():
            return True
        if deadline is not None and time.monotonic() >= deadline:
            return True
        return False

    def get_statistics(self) -> Dict[str, Any]:
        """Return engine statistics."""
        return {
            'iterations': self.iteration,
            'improvements': len(self.improvements),
            'best_cost': self.history[-1] if self.history else (
                self.best.get_cost(self.instance) if self.best is not None else None),
            'execution_time': self.execution_time,
            'neighborhoods': [n.get_statistics() for n in self.neighborhoods],
            'local_search': self.local_search.get_statistics(),
        }
