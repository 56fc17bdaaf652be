"""
Unit tests for metrics, validation, export and plotting.
"""

import json
import os
import sys
import tempfile
import unittest
import numpy as np
import pandas as pd

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution
from hubvns.algorithms.solver import SolverConfig, solve
from hubvns.evaluation.metrics import calculate_gap, HubMetricsCalculator
from hubvns.evaluation.validator import SolutionValidator
from hubvns.evaluation.result_exporter import ResultExporter
from hubvns.visualization.plotter import Plotter


def make_line_instance() -> HubInstance:
    flow = np.zeros((3, 3))
    flow[0, 2] = 5
    flow[2, 0] = 5
    return HubInstance(3, 0.5, [10, 10, 10], [[0, 1, 2], [1, 0, 1], [2, 1, 0]], flow,
                       name='line3')


class TestMetrics(unittest.TestCase):
    """Test gap and structural metrics."""

    def test_gap(self):
        self.assertAlmostEqual(calculate_gap(110.0, 100.0), 10.0)
        self.assertAlmostEqual(calculate_gap(100.0, 100.0), 0.0)
        self.assertIsNone(calculate_gap(100.0, None))
        self.assertIsNone(calculate_gap(100.0, 0.0))

    def test_hub_metrics(self):
        instance = make_line_instance()
        solution = HubSolution.from_hubs(instance, [0, 2])
        metrics = HubMetricsCalculator(instance).calculate_metrics(solution, target_cost=30.0)

        self.assertAlmostEqual(metrics['total_cost'], 30.0)
        self.assertAlmostEqual(metrics['installation_cost'], 20.0)
        self.assertAlmostEqual(metrics['routing_cost'], 10.0)
        self.assertEqual(metrics['hub_count'], 2)
        self.assertEqual(metrics['nodes_per_hub'], {0: 2, 2: 1})
        self.assertAlmostEqual(metrics['mean_access_distance'], 1.0)
        self.assertAlmostEqual(metrics['gap'], 0.0)


class TestSolutionValidator(unittest.TestCase):
    """Test solution validation."""

    def setUp(self):
        self.instance = make_line_instance()
        self.validator = SolutionValidator(self.instance)

    def test_valid_solution(self):
        solution = HubSolution.from_hubs(self.instance, [1])
        solution.get_cost(self.instance)
        result = self.validator.validate_solution(solution)

        self.assertTrue(result['is_valid'])
        self.assertTrue(result['cached_cost_consistent'])
        self.assertAlmostEqual(result['cost'], 30.0)

    def test_unserved_node(self):
        solution = HubSolution(hubs={0}, assignment=[0, 0, 2])
        result = self.validator.validate_solution(solution)
        self.assertFalse(result['is_valid'])
        self.assertTrue(any('closed hubs' in e for e in result['errors']))

    def test_hub_not_self_assigned(self):
        solution = HubSolution(hubs={0, 1}, assignment=[0, 0, 0])
        result = self.validator.validate_solution(solution)
        self.assertFalse(result['is_valid'])

    def test_empty_hub_set(self):
        result = self.validator.validate_solution(HubSolution(hubs=set(), assignment=[0, 0, 0]))
        self.assertFalse(result['is_valid'])

    def test_stale_cached_cost_detected(self):
        solution = HubSolution(hubs={1}, assignment=[1, 1, 1], _cost=1.0)
        result = self.validator.validate_solution(solution)
        self.assertFalse(result['cached_cost_consistent'])
        self.assertFalse(result['is_valid'])


class TestResultExport(unittest.TestCase):
    """Test result exporting and plotting."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.instance = make_line_instance()
        self.result = solve(self.instance, SolverConfig(time_limit=None, max_iterations=10, seed=0))

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_export_all(self):
        exporter = ResultExporter(self.temp_dir.name)
        paths = exporter.export_all(self.result, self.instance)

        for path in paths.values():
            self.assertTrue(os.path.exists(path))

        with open(paths['summary']) as f:
            summary = json.load(f)
        self.assertEqual(summary['instance']['name'], 'line3')
        self.assertAlmostEqual(summary['result']['cost'], 30.0)

        assignment = pd.read_csv(paths['assignment'])
        self.assertEqual(len(assignment), 3)
        self.assertEqual(assignment['is_hub'].sum(), len(self.result.hubs))

        history = pd.read_csv(paths['history'])
        self.assertEqual(len(history), 10)

    def test_assignment_table(self):
        table = ResultExporter(self.temp_dir.name).build_assignment_table(
            HubSolution.from_hubs(self.instance, [0, 2]), self.instance)
        self.assertEqual(list(table['hub']), [0, 0, 2])
        self.assertEqual(list(table['outgoing_flow']), [5.0, 0.0, 5.0])

    def test_convergence_plot(self):
        save_path = os.path.join(self.temp_dir.name, 'convergence.png')
        fig = Plotter().plot_convergence(self.result.history, target_cost=30.0, save_path=save_path)
        self.assertIsNotNone(fig)
        self.assertTrue(os.path.exists(save_path))

    def test_worker_plot(self):
        fig = Plotter().plot_worker_costs(self.result.worker_results)
        self.assertIsNotNone(fig)


if __name__ == '__main__':
    unittest.main()
