"""
Neighborhood structures for VNS on hub location solutions.
Implements Shift, RemoveHub, AddHub and SwapFunction perturbations.
"""

from typing import List, Optional
import numpy as np
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution
from hubvns.algorithms.base import BaseNeighborhood
from hubvns.core.exceptions import InfeasibleMoveError


class ShiftNeighborhood(BaseNeighborhood):
    """Reallocate a random non-hub node to a different open hub."""

    name = 'shift'

    def _move(self, instance: HubInstance, candidate: HubSolution) -> Optional[HubSolution]:
        spokes = candidate.non_hub_nodes()
        if not spokes:
            return None

        node = int(self.rng.choice(spokes))
        alternatives = sorted(candidate.hubs - {candidate.hub_of(node)})
        if not alternatives:
            return None

        candidate.assign(node, int(self.rng.choice(alternatives)))
        return candidate


class RemoveHubNeighborhood(BaseNeighborhood):
    """Close a random hub; its nodes move to their nearest remaining hub."""

    name = 'remove_hub'

    def _move(self, instance: HubInstance, candidate: HubSolution) -> Optional[HubSolution]:
        hub = int(self.rng.choice(sorted(candidate.hubs)))
        try:
            candidate.close_hub(instance, hub)
        except InfeasibleMoveError:
            return None
        return candidate


class AddHubNeighborhood(BaseNeighborhood):
    """Open a random closed node; nodes strictly closer to it switch over."""

    name = 'add_hub'

    def _move(self, instance: HubInstance, candidate: HubSolution) -> Optional[HubSolution]:
        closed = candidate.closed_nodes()
        if not closed:
            return None

        new_hub = int(self.rng.choice(closed))
        candidate.open_hub(new_hub)

        nodes = np.arange(instance.size)
        current_access = instance.distance[nodes, candidate.assignment]
        closer = instance.distance[:, new_hub] < current_access
        for node in np.flatnonzero(closer):
            if int(node) not in candidate.hubs:
                candidate.assign(int(node), new_hub)

        return candidate


class SwapFunctionNeighborhood(BaseNeighborhood):
    """Swap roles of a random hub and a random closed node."""

    name = 'swap_function'

    def _move(self, instance: HubInstance, candidate: HubSolution) -> Optional[HubSolution]:
        closed = candidate.closed_nodes()
        if not closed:
            return None

        entering = int(self.rng.choice(closed))
        leaving = int(self.rng.choice(sorted(candidate.hubs)))

        candidate.open_hub(entering)
        candidate.close_hub(instance, leaving)
        return candidate


def build_neighborhoods(rng: Optional[np.random.Generator] = None) -> List[BaseNeighborhood]:
    """
    Default VNS escalation order sharing one random stream.

    Args:
        rng: Random generator

    Returns:
        [Shift, RemoveHub, AddHub, SwapFunction]
    """
    rng = rng if rng is not None else np.random.default_rng()
    return [
        ShiftNeighborhood(rng),
        RemoveHubNeighborhood(rng),
        AddHubNeighborhood(rng),
        SwapFunctionNeighborhood(rng),
    ]
