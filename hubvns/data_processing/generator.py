"""
Random instance generator for hub location problems.
Creates synthetic networks with Euclidean distances and uniform flows.
"""

from typing import Dict, Optional
import numpy as np
import pandas as pd
from hubvns.models.instance import HubInstance
from config import GENERATOR_CONFIG


class InstanceGenerator:
    """Generates synthetic hub location instances."""

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize generator with configuration.

        Args:
            config: Configuration dictionary, uses default if None
        """
        self.config = GENERATOR_CONFIG.copy()
        if config:
            self.config.update(config)
        self.rng = np.random.default_rng(self.config['seed'])
        self.coordinates = None

    def generate(self, n_nodes: Optional[int] = None,
                 scale_factor: Optional[float] = None,
                 name: Optional[str] = None) -> HubInstance:
        """
        Generate an instance.

        Args:
            n_nodes: Number of nodes
            scale_factor: Inter-hub discount
            name: Instance name

        Returns:
            HubInstance
        """
        n_nodes = n_nodes or self.config['n_nodes']
        scale_factor = self.config['scale_factor'] if scale_factor is None else scale_factor

        low, high = self.config['area_bounds']
        self.coordinates = self.rng.uniform(low, high, size=(n_nodes, 2))

        deltas = self.coordinates[:, None, :] - self.coordinates[None, :, :]
        distance = np.sqrt((deltas ** 2).sum(axis=2))

        flow_low, flow_high = self.config['flow_range']
        flow = self.rng.uniform(flow_low, flow_high, size=(n_nodes, n_nodes))
        np.fill_diagonal(flow, 0.0)

        cost_low, cost_high = self.config['installation_cost_range']
        installation_cost = self.rng.uniform(cost_low, cost_high, size=n_nodes)

        return HubInstance(
            size=n_nodes,
            scale_factor=scale_factor,
            installation_cost=installation_cost,
            distance=distance,
            flow=flow,
            name=name or f"random_{n_nodes}"
        )

    def coordinates_frame(self) -> pd.DataFrame:
        """Node coordinates of the last generated instance."""
        if self.coordinates is None:
            return pd.DataFrame(columns=['node', 'x', 'y'])
        return pd.DataFrame({
            'node': np.arange(len(self.coordinates)),
            'x': self.coordinates[:, 0],
            'y': self.coordinates[:, 1],
        })


def generate_instance(n_nodes: int = 20, scale_factor: float = 0.75,
                      seed: int = 42) -> HubInstance:
    """
    Convenience function to generate an instance.

    Args:
        n_nodes: Number of nodes
        scale_factor: Inter-hub discount
        seed: Random seed

    Returns:
        HubInstance
    """
    generator = InstanceGenerator({'n_nodes': n_nodes, 'scale_factor': scale_factor, 'seed': seed})
    return generator.generate()
