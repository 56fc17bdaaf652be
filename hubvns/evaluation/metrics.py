"""
Metrics for hub location solutions.
Calculates target gaps and structural statistics of a hub network.
"""

from typing import Dict, Optional
import numpy as np
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution


def calculate_gap(cost: float, target_cost: Optional[float]) -> Optional[float]:
    """
    Percentage gap of cost to a reference cost.

    Args:
        cost: Obtained cost
        target_cost: Reference (e.g. best known) cost; ignored if None or <= 0

    Returns:
        (cost - target) / target * 100, or None without a valid target
    """
    if target_cost is None or target_cost <= 0:
        return None
    return (cost - target_cost) / target_cost * 100.0


class HubMetricsCalculator:
    """Calculates structural metrics for hub location solutions."""

    def __init__(self, instance: HubInstance):
        """
        Initialize metrics calculator.

        Args:
            instance: Problem instance
        """
        self.instance = instance

    def calculate_metrics(self, solution: HubSolution,
                          target_cost: Optional[float] = None) -> Dict:
        """
        Calculate solution metrics.

        Args:
            solution: Solution to analyze
            target_cost: Optional reference cost for the gap

        Returns:
            Dictionary of metrics
        """
        total_cost = solution.get_cost(self.instance)
        hubs = sorted(solution.hubs)
        installation = float(self.instance.installation_cost[hubs].sum())
        routing = total_cost - installation

        nodes = np.arange(self.instance.size)
        access = self.instance.distance[nodes, solution.assignment]
        spokes = [n for n in nodes if n not in solution.hubs]

        nodes_per_hub = {hub: len(solution.served_by(hub)) for hub in hubs}

        return {
            'total_cost': total_cost,
            'installation_cost': installation,
            'routing_cost': routing,
            'installation_share': installation / total_cost if total_cost > 0 else 0.0,
            'hub_count': len(hubs),
            'hubs': hubs,
            'nodes_per_hub': nodes_per_hub,
            'max_nodes_per_hub': max(nodes_per_hub.values()),
            'mean_access_distance': float(access[spokes].mean()) if spokes else 0.0,
            'max_access_distance': float(access.max()),
            'gap': calculate_gap(total_cost, target_cost),
        }
