"""
Hub location problem model.
Defines the read-only problem instance shared by every search worker.
"""

from typing import Dict, Optional, Sequence
import numpy as np
from hubvns.core.exceptions import InvalidInstanceError


class HubInstance:
    """
    Static data of an uncapacitated single-allocation hub location problem.

    The instance is frozen after construction: the numpy arrays are
    read-only and attributes cannot be rebound, so parallel workers can
    share one object without locking.
    """

    def __init__(self,
                 size: int,
                 scale_factor: float,
                 installation_cost: Sequence[float],
                 distance: Sequence[Sequence[float]],
                 flow: Sequence[Sequence[float]],
                 name: Optional[str] = None):
        """
        Initialize hub location instance.

        Args:
            size: Number of candidate nodes (indices 0..size-1)
            scale_factor: Discount multiplier on hub-to-hub links
            installation_cost: Cost of opening each node as a hub
            distance: size x size distance matrix
            flow: size x size flow (demand) matrix
            name: Optional instance name (e.g. file stem)
        """
        self.size = int(size)
        self.scale_factor = float(scale_factor)
        self.name = name

        self._validate_size()

        self.installation_cost = self._to_array(installation_cost, (self.size,), 'installation_cost')
        self.distance = self._to_array(distance, (self.size, self.size), 'distance')
        self.flow = self._to_array(flow, (self.size, self.size), 'flow')

        if self.scale_factor < 0:
            raise InvalidInstanceError(f"scale factor must be >= 0, got {self.scale_factor}", self.size)

        # Total flow originating at or destined to each node
        node_weight = self.flow.sum(axis=1) + self.flow.sum(axis=0)
        node_weight.setflags(write=False)
        self.node_weight = node_weight

        self._frozen = True

    def __setattr__(self, key, value):
        if getattr(self, '_frozen', False):
            raise AttributeError(f"HubInstance is read-only; cannot set '{key}'")
        super().__setattr__(key, value)

    def _validate_size(self):
        if self.size <= 0:
            raise InvalidInstanceError("instance size must be >= 1", self.size)

    def _to_array(self, values, shape, field_name: str) -> np.ndarray:
        array = np.array(values, dtype=float)
        if array.shape != shape:
            raise InvalidInstanceError(
                f"{field_name} has shape {array.shape}, expected {shape}", self.size
            )
        array.setflags(write=False)
        return array

    @property
    def nodes(self) -> range:
        """Node indices 0..size-1."""
        return range(self.size)

    def get_distance(self, from_node: int, to_node: int) -> float:
        """Get distance between two nodes."""
        return float(self.distance[from_node, to_node])

    def nearest_hub(self, node: int, hubs) -> int:
        """Return the open hub closest to node (lowest index on ties)."""
        candidates = sorted(hubs)
        distances = self.distance[node, candidates]
        return candidates[int(np.argmin(distances))]

    def total_flow(self) -> float:
        """Total demand over all origin/destination pairs."""
        return float(self.flow.sum())

    def get_instance_info(self) -> Dict:
        """Get instance information summary."""
        return {
            'name': self.name,
            'size': int(self.size),
            'scale_factor': float(self.scale_factor),
            'total_flow': self.total_flow(),
            'min_installation_cost': float(self.installation_cost.min()),
            'max_installation_cost': float(self.installation_cost.max()),
            'is_symmetric': bool(np.allclose(self.distance, self.distance.T)),
        }

    def __repr__(self):
        label = f" '{self.name}'" if self.name else ""
        return f"HubInstance{label}(size={self.size}, scale_factor={self.scale_factor})"


def create_instance_from_dict(data: Dict) -> HubInstance:
    """
    Create hub instance from dictionary data.

    Args:
        data: Dictionary with size, scale_factor, installation_cost, distance, flow

    Returns:
        HubInstance
    """
    return HubInstance(
        size=data['size'],
        scale_factor=data['scale_factor'],
        installation_cost=data['installation_cost'],
        distance=data['distance'],
        flow=data['flow'],
        name=data.get('name')
    )
