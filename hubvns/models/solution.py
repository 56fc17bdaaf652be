"""
Solution representation for hub location problems.
Defines the candidate solution (hub set + allocation) and its cost model.
"""

from typing import Dict, Iterable, List, Optional, Set
from dataclasses import dataclass, field
import numpy as np
from hubvns.models.instance import HubInstance
from hubvns.core.exceptions import InfeasibleMoveError, InfeasibleSolutionError


def evaluate_cost(instance: HubInstance, hubs: Iterable[int], assignment) -> float:
    """
    Total cost of a hub configuration.

    cost = sum of installation costs of open hubs
         + sum_ij flow[i,j] * (d[i,a_i] + inter(a_i,a_j) + d[a_j,j])

    where inter(a,b) = scale_factor * d[a,b] if a != b, else 0.

    Args:
        instance: Problem instance
        hubs: Open hubs
        assignment: Node -> hub allocation (length = instance.size)

    Returns:
        Total installation + routing cost
    """
    allocation = np.asarray(assignment, dtype=int)
    nodes = np.arange(instance.size)
    distance = instance.distance

    collection = distance[nodes, allocation]
    distribution = distance[allocation, nodes]

    transfer = instance.scale_factor * distance[np.ix_(allocation, allocation)]
    transfer[allocation[:, None] == allocation[None, :]] = 0.0

    routing = np.sum(instance.flow * (collection[:, None] + transfer + distribution[None, :]))
    installation = instance.installation_cost[sorted(hubs)].sum()

    return float(installation + routing)


def _node_routing_cost(instance: HubInstance, allocation: np.ndarray, node: int) -> float:
    """Routing cost of every flow that starts or ends at node."""
    nodes = np.arange(instance.size)
    distance = instance.distance
    alpha = instance.scale_factor
    hub = allocation[node]
    same_hub = allocation == hub

    outbound_transfer = np.where(same_hub, 0.0, alpha * distance[hub, allocation])
    outbound = instance.flow[node, :] * (
        distance[node, hub] + outbound_transfer + distance[allocation, nodes]
    )

    inbound_transfer = np.where(same_hub, 0.0, alpha * distance[allocation, hub])
    inbound = instance.flow[:, node] * (
        distance[nodes, allocation] + inbound_transfer + distance[hub, node]
    )

    # flow[node, node] appears in both sums
    self_flow = instance.flow[node, node] * (distance[node, hub] + distance[hub, node])

    return float(outbound.sum() + inbound.sum() - self_flow)


def allocation_delta(instance: HubInstance, solution: 'HubSolution',
                     node: int, new_hub: int) -> float:
    """
    Exact cost change of moving a non-hub node to another open hub, in O(n).

    Args:
        instance: Problem instance
        solution: Current solution (not modified)
        node: Non-hub node to reallocate
        new_hub: Open hub to allocate it to

    Returns:
        new_cost - old_cost
    """
    current = solution.assignment
    if current[node] == new_hub:
        return 0.0

    moved = current.copy()
    moved[node] = new_hub

    return _node_routing_cost(instance, moved, node) - _node_routing_cost(instance, current, node)


@dataclass(eq=False)
class HubSolution:
    """Candidate solution: open hubs plus a single-allocation of every node."""
    hubs: Set[int] = field(default_factory=set)
    assignment: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    _cost: Optional[float] = field(default=None, repr=False)

    def __post_init__(self):
        """Normalize container types."""
        self.hubs = {int(h) for h in self.hubs}
        self.assignment = np.array(self.assignment, dtype=int)

    def __eq__(self, other):
        if not isinstance(other, HubSolution):
            return NotImplemented
        return self.hubs == other.hubs and np.array_equal(self.assignment, other.assignment)

    @classmethod
    def from_hubs(cls, instance: HubInstance, hubs: Iterable[int]) -> 'HubSolution':
        """
        Build a solution allocating every node to its nearest open hub.

        Args:
            instance: Problem instance
            hubs: Non-empty collection of hub indices

        Returns:
            New solution
        """
        hub_set = {int(h) for h in hubs}
        if not hub_set:
            raise InfeasibleSolutionError("A solution needs at least one hub")

        hub_list = sorted(hub_set)
        nearest = np.argmin(instance.distance[:, hub_list], axis=1)
        assignment = np.array(hub_list, dtype=int)[nearest]
        assignment[hub_list] = hub_list

        return cls(hubs=hub_set, assignment=assignment)

    @classmethod
    def from_assignment(cls, instance: HubInstance, assignment) -> 'HubSolution':
        """
        Build a solution from an explicit allocation; hubs are the allocation targets.

        Raises:
            InfeasibleSolutionError: If the allocation breaks the invariants
        """
        allocation = np.array(assignment, dtype=int)
        if allocation.shape != (instance.size,):
            raise InfeasibleSolutionError(
                "Assignment length does not match instance size",
                {'expected': instance.size, 'actual': int(allocation.size)}
            )
        if allocation.min() < 0 or allocation.max() >= instance.size:
            raise InfeasibleSolutionError("Assignment references an unknown node")

        hubs = set(int(h) for h in np.unique(allocation))
        not_self_assigned = [h for h in hubs if allocation[h] != h]
        if not_self_assigned:
            raise InfeasibleSolutionError(
                "Hubs must be allocated to themselves",
                {'hubs': sorted(not_self_assigned)}
            )

        return cls(hubs=hubs, assignment=allocation)

    @property
    def size(self) -> int:
        return int(self.assignment.size)

    @property
    def is_cost_cached(self) -> bool:
        return self._cost is not None

    def copy(self) -> 'HubSolution':
        """Create a deep copy of the solution (cached cost included)."""
        return HubSolution(hubs=set(self.hubs), assignment=self.assignment.copy(), _cost=self._cost)

    def get_cost(self, instance: HubInstance) -> float:
        """Total cost, computed lazily and cached until the next mutation."""
        if self._cost is None:
            self._cost = evaluate_cost(instance, self.hubs, self.assignment)
        return self._cost

    def invalidate(self):
        """Drop the cached cost."""
        self._cost = None

    def hub_of(self, node: int) -> int:
        return int(self.assignment[node])

    def served_by(self, hub: int) -> List[int]:
        """Nodes allocated to hub (the hub included)."""
        return [int(n) for n in np.flatnonzero(self.assignment == hub)]

    def non_hub_nodes(self) -> List[int]:
        return [n for n in range(self.size) if n not in self.hubs]

    def closed_nodes(self) -> List[int]:
        """Nodes that could still be opened as hubs."""
        return self.non_hub_nodes()

    def open_hub(self, node: int):
        """Open node as a hub; it becomes allocated to itself."""
        self.hubs.add(int(node))
        self.assignment[node] = node
        self.invalidate()

    def close_hub(self, instance: HubInstance, hub: int) -> List[int]:
        """
        Close a hub and reallocate its nodes to their nearest remaining hub.

        Args:
            instance: Problem instance
            hub: Hub to close

        Returns:
            Nodes that were reallocated

        Raises:
            InfeasibleMoveError: If hub is not open or is the last open hub
        """
        if hub not in self.hubs:
            raise InfeasibleMoveError('close_hub', f"node {hub} is not a hub")
        if len(self.hubs) == 1:
            raise InfeasibleMoveError('close_hub', "cannot close the last open hub")

        orphans = self.served_by(hub)
        self.hubs.remove(hub)
        self.reassign_to_nearest(instance, orphans)
        return orphans

    def assign(self, node: int, hub: int):
        """
        Allocate a non-hub node to an open hub.

        Raises:
            InfeasibleMoveError: If hub is closed or node is itself a hub
        """
        if hub not in self.hubs:
            raise InfeasibleMoveError('assign', f"node {hub} is not a hub")
        if node in self.hubs and node != hub:
            raise InfeasibleMoveError('assign', f"hub {node} must stay allocated to itself")

        self.assignment[node] = hub
        self.invalidate()

    def reassign_to_nearest(self, instance: HubInstance, nodes: Iterable[int]):
        """Allocate each given node to its nearest open hub (hubs to themselves)."""
        hub_list = sorted(self.hubs)
        for node in nodes:
            if node in self.hubs:
                self.assignment[node] = node
            else:
                self.assignment[node] = instance.nearest_hub(node, hub_list)
        self.invalidate()

    def is_feasible(self, instance: HubInstance) -> bool:
        """Check every hub/allocation invariant."""
        if not self.hubs or self.size != instance.size:
            return False
        if any(h < 0 or h >= instance.size for h in self.hubs):
            return False
        if any(int(a) not in self.hubs for a in self.assignment):
            return False
        return all(self.assignment[h] == h for h in self.hubs)

    def get_hub_count(self) -> int:
        return len(self.hubs)

    def to_dict(self, instance: Optional[HubInstance] = None) -> Dict:
        """Convert solution to dictionary."""
        cost = self.get_cost(instance) if instance is not None else self._cost
        return {
            'hubs': sorted(int(h) for h in self.hubs),
            'assignment': [int(a) for a in self.assignment],
            'cost': float(cost) if cost is not None else None,
            'hub_count': self.get_hub_count(),
        }
