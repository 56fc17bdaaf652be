"""
Result export module for the Hub-VNS solver.
Exports solver results as JSON and CSV tables for analysis.
"""

import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional
import numpy as np
import pandas as pd
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution

logger = logging.getLogger(__name__)


class ResultExporter:
    """Exports solver results in various formats."""

    def __init__(self, output_dir: str = "results"):
        """
        Initialize result exporter.

        Args:
            output_dir: Output directory for results
        """
        self.output_dir = output_dir
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        os.makedirs(self.output_dir, exist_ok=True)

    def export_summary(self, result, instance: HubInstance,
                       filename: Optional[str] = None) -> str:
        """
        Export solver result summary to JSON.

        Args:
            result: SolverResult
            instance: Problem instance
            filename: Output filename (auto-generated if None)

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = f"solution_{self.timestamp}.json"

        filepath = os.path.join(self.output_dir, filename)
        data = {
            'instance': instance.get_instance_info(),
            'result': result.to_dict(),
            'exported_at': datetime.now().isoformat(),
        }

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

        logger.info(f"Solution summary exported to: {filepath}")
        return filepath

    def build_assignment_table(self, solution: HubSolution, instance: HubInstance) -> pd.DataFrame:
        """
        One row per node: its hub, whether it is a hub, and its access distance.

        Args:
            solution: Solution to tabulate
            instance: Problem instance

        Returns:
            DataFrame indexed by node
        """
        nodes = np.arange(instance.size)
        df = pd.DataFrame({
            'node': nodes,
            'hub': solution.assignment,
            'is_hub': [int(n) in solution.hubs for n in nodes],
            'access_distance': instance.distance[nodes, solution.assignment],
            'outgoing_flow': instance.flow.sum(axis=1),
            'incoming_flow': instance.flow.sum(axis=0),
        })
        return df.set_index('node')

    def export_assignment(self, solution: HubSolution, instance: HubInstance,
                          filename: Optional[str] = None) -> str:
        """
        Export node allocation to CSV.

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = f"assignment_{self.timestamp}.csv"

        filepath = os.path.join(self.output_dir, filename)
        self.build_assignment_table(solution, instance).to_csv(filepath)

        logger.info(f"Assignment exported to: {filepath}")
        return filepath

    def export_history(self, history: List[float], filename: Optional[str] = None) -> str:
        """
        Export best cost per VNS iteration to CSV.

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = f"convergence_{self.timestamp}.csv"

        filepath = os.path.join(self.output_dir, filename)
        df = pd.DataFrame({'iteration': range(1, len(history) + 1), 'best_cost': history})
        df.to_csv(filepath, index=False)

        logger.info(f"Convergence history exported to: {filepath}")
        return filepath

    def export_all(self, result, instance: HubInstance) -> Dict[str, str]:
        """Export summary, assignment and history; returns the written paths."""
        return {
            'summary': self.export_summary(result, instance),
            'assignment': self.export_assignment(result.solution, instance),
            'history': self.export_history(result.history),
        }
