"""
GRASP construction heuristic for hub location.
Builds the initial feasible solution for VNS with greedy-randomized hub opening.
"""

import logging
from typing import Dict, List, Optional
import numpy as np
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution
from hubvns.core.exceptions import InvalidInstanceError
from hubvns.core.validators import ConfigValidator
from config import GRASP_CONFIG

logger = logging.getLogger(__name__)


class GRASPConstructor:
    """
    Greedy Randomized Adaptive construction.

    Greedy function: a node's cost as a hub is its installation cost plus
    the flow-weighted access distance of every node to it. Each step opens
    a random member of the restricted candidate list (RCL)

        RCL = {k : score(k) <= min + alpha * (max - min)}

    and stops once no closed node lowers the estimated total cost.
    """

    def __init__(self, instance: HubInstance, config: Optional[Dict] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize GRASP constructor.

        Args:
            instance: Problem instance
            config: GRASP configuration (alpha, max_hubs)
            rng: Random generator for the RCL draws
        """
        self.instance = instance
        self.config = config or GRASP_CONFIG.copy()
        ConfigValidator.validate_grasp_config(self.config)

        self.alpha = self.config['alpha']
        self.max_hubs = self.config.get('max_hubs')
        self.rng = rng if rng is not None else np.random.default_rng()

    def construct(self) -> HubSolution:
        """
        Build a feasible solution from scratch.

        Returns:
            Solution with every node allocated to its nearest open hub
        """
        if self.instance.size <= 0:
            raise InvalidInstanceError("cannot construct a solution for an empty instance",
                                       self.instance.size)

        if self.instance.size == 1:
            return HubSolution.from_hubs(self.instance, [0])

        hubs = self._select_hubs()
        solution = HubSolution.from_hubs(self.instance, hubs)

        logger.debug(f"GRASP built {len(hubs)} hubs, cost={solution.get_cost(self.instance):.4f}")
        return solution

    def _select_hubs(self) -> List[int]:
        """Greedy-randomized hub opening on the access-cost estimate."""
        distance = self.instance.distance
        weight = self.instance.node_weight
        install = self.instance.installation_cost

        single_hub_scores = install + weight @ distance
        first = self._select_from_rcl(np.arange(self.instance.size), single_hub_scores)

        hubs = [first]
        is_hub = np.zeros(self.instance.size, dtype=bool)
        is_hub[first] = True
        access = distance[:, first].copy()
        installed = float(install[first])
        current_estimate = installed + float(weight @ access)

        while not is_hub.all():
            if self.max_hubs is not None and len(hubs) >= self.max_hubs:
                break

            closed = np.flatnonzero(~is_hub)
            access_with_candidate = np.minimum(access[:, None], distance[:, closed])
            estimates = installed + install[closed] + weight @ access_with_candidate

            improving = estimates < current_estimate
            if not improving.any():
                break

            pick = self._select_from_rcl(closed[improving], estimates[improving])
            hubs.append(pick)
            is_hub[pick] = True
            access = np.minimum(access, distance[:, pick])
            installed += float(install[pick])
            current_estimate = installed + float(weight @ access)

        return hubs

    def _select_from_rcl(self, candidates: np.ndarray, scores: np.ndarray) -> int:
        """Draw uniformly from the restricted candidate list."""
        best, worst = scores.min(), scores.max()
        threshold = best + self.alpha * (worst - best)
        rcl = candidates[scores <= threshold]
        return int(self.rng.choice(rcl))


def construct_solution(instance: HubInstance, alpha: Optional[float] = None,
                       rng: Optional[np.random.Generator] = None) -> HubSolution:
    """
    Convenience wrapper around GRASPConstructor.

    Args:
        instance: Problem instance
        alpha: RCL greediness override
        rng: Random generator

    Returns:
        Initial solution
    """
    config = GRASP_CONFIG.copy()
    if alpha is not None:
        config['alpha'] = alpha
    return GRASPConstructor(instance, config, rng).construct()
