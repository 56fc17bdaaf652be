"""
Unit tests for the hub location models.
Tests the instance, the candidate solution and the cost model.
"""

import unittest
import numpy as np

# Add project root to path
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hubvns.models.instance import HubInstance, create_instance_from_dict
from hubvns.models.solution import HubSolution, evaluate_cost, allocation_delta
from hubvns.core.exceptions import InvalidInstanceError, InfeasibleMoveError, InfeasibleSolutionError


def make_line_instance() -> HubInstance:
    """Three nodes on a line, flow only between the two ends."""
    flow = np.zeros((3, 3))
    flow[0, 2] = 5
    flow[2, 0] = 5
    return HubInstance(
        size=3,
        scale_factor=0.5,
        installation_cost=[10, 10, 10],
        distance=[[0, 1, 2], [1, 0, 1], [2, 1, 0]],
        flow=flow
    )


def make_random_instance(size: int = 8, seed: int = 3) -> HubInstance:
    """Asymmetric instance with non-zero diagonals."""
    rng = np.random.default_rng(seed)
    return HubInstance(
        size=size,
        scale_factor=0.6,
        installation_cost=rng.uniform(5, 20, size),
        distance=rng.uniform(0, 10, (size, size)),
        flow=rng.uniform(0, 3, (size, size))
    )


class TestHubInstance(unittest.TestCase):
    """Test instance creation and validation."""

    def test_instance_creation(self):
        """Test basic attributes."""
        instance = make_line_instance()
        self.assertEqual(instance.size, 3)
        self.assertEqual(instance.scale_factor, 0.5)
        self.assertEqual(instance.get_distance(0, 2), 2.0)
        self.assertEqual(list(instance.nodes), [0, 1, 2])

    def test_node_weight(self):
        """Node weight is outgoing plus incoming flow."""
        instance = make_line_instance()
        np.testing.assert_array_equal(instance.node_weight, [10, 0, 10])

    def test_zero_size_rejected(self):
        """Test that an empty instance is rejected."""
        with self.assertRaises(InvalidInstanceError):
            HubInstance(0, 0.5, [], [], [])

    def test_dimension_mismatch_rejected(self):
        """Test that matrix shapes must match size."""
        with self.assertRaises(InvalidInstanceError):
            HubInstance(2, 0.5, [1, 1], [[0, 1], [1, 0]], [[0, 1, 2], [1, 0, 2]])

        with self.assertRaises(InvalidInstanceError):
            HubInstance(2, 0.5, [1], [[0, 1], [1, 0]], [[0, 1], [1, 0]])

    def test_negative_scale_factor_rejected(self):
        with self.assertRaises(InvalidInstanceError):
            HubInstance(1, -0.1, [1], [[0]], [[0]])

    def test_instance_is_read_only(self):
        """Test construct-then-freeze."""
        instance = make_line_instance()

        with self.assertRaises(ValueError):
            instance.distance[0, 1] = 99

        with self.assertRaises(AttributeError):
            instance.scale_factor = 1.0

    def test_inputs_are_copied(self):
        """Mutating the source lists does not affect the instance."""
        distance = [[0.0, 1.0], [1.0, 0.0]]
        instance = HubInstance(2, 1.0, [1, 1], distance, [[0, 1], [1, 0]])
        distance[0][1] = 50.0
        self.assertEqual(instance.get_distance(0, 1), 1.0)

    def test_nearest_hub(self):
        instance = make_line_instance()
        self.assertEqual(instance.nearest_hub(0, {1, 2}), 1)
        # Tie between hubs 0 and 2 goes to the lower index
        self.assertEqual(instance.nearest_hub(1, {0, 2}), 0)

    def test_instance_info(self):
        info = make_line_instance().get_instance_info()
        self.assertEqual(info['size'], 3)
        self.assertEqual(info['total_flow'], 10.0)
        self.assertTrue(info['is_symmetric'])

    def test_create_from_dict(self):
        instance = create_instance_from_dict({
            'size': 1, 'scale_factor': 1.0, 'installation_cost': [4],
            'distance': [[0]], 'flow': [[0]], 'name': 'single'
        })
        self.assertEqual(instance.name, 'single')
        self.assertEqual(instance.size, 1)


class TestCostModel(unittest.TestCase):
    """Test the cost evaluator against hand-computed values."""

    def setUp(self):
        self.instance = make_line_instance()

    def test_single_central_hub(self):
        """All flow 0->2 detours through hub 1: 2 * 5 * (1 + 1) + 10."""
        cost = evaluate_cost(self.instance, {1}, [1, 1, 1])
        self.assertAlmostEqual(cost, 30.0)

    def test_two_end_hubs(self):
        """Inter-hub leg discounted by 0.5: 2 * 5 * (0.5 * 2) + 20."""
        cost = evaluate_cost(self.instance, {0, 2}, [0, 0, 2])
        self.assertAlmostEqual(cost, 30.0)

    def test_all_hubs(self):
        cost = evaluate_cost(self.instance, {0, 1, 2}, [0, 1, 2])
        self.assertAlmostEqual(cost, 40.0)

    def test_same_hub_has_no_transfer_leg(self):
        """Distance diagonal is ignored when origin and destination share a hub."""
        instance = HubInstance(2, 0.5, [1, 1], [[7, 1], [1, 7]], [[0, 2], [0, 0]])
        # 0 -> 1 via hub 0: d[0,0] + 0 + d[0,1] = 7 + 1
        self.assertAlmostEqual(evaluate_cost(instance, {0}, [0, 0]), 1 + 2 * 8)

    def test_allocation_delta_matches_recomputation(self):
        """O(n) delta equals the difference of full evaluations."""
        instance = make_random_instance()
        solution = HubSolution.from_hubs(instance, [0, 3, 6])
        base_cost = solution.get_cost(instance)

        for node in solution.non_hub_nodes():
            for hub in sorted(solution.hubs):
                moved = solution.copy()
                moved.assign(node, hub)
                expected = moved.get_cost(instance) - base_cost
                delta = allocation_delta(instance, solution, node, hub)
                self.assertAlmostEqual(delta, expected, places=8)


class TestHubSolution(unittest.TestCase):
    """Test candidate solution invariants and mutators."""

    def setUp(self):
        self.instance = make_line_instance()

    def test_from_hubs_allocates_nearest(self):
        solution = HubSolution.from_hubs(self.instance, [0, 2])
        self.assertEqual(solution.hubs, {0, 2})
        self.assertEqual(list(solution.assignment), [0, 0, 2])
        self.assertTrue(solution.is_feasible(self.instance))

    def test_from_hubs_requires_a_hub(self):
        with self.assertRaises(InfeasibleSolutionError):
            HubSolution.from_hubs(self.instance, [])

    def test_from_assignment(self):
        solution = HubSolution.from_assignment(self.instance, [1, 1, 1])
        self.assertEqual(solution.hubs, {1})

        with self.assertRaises(InfeasibleSolutionError):
            HubSolution.from_assignment(self.instance, [1, 2, 1])

        with self.assertRaises(InfeasibleSolutionError):
            HubSolution.from_assignment(self.instance, [0, 0])

    def test_cost_is_cached_and_invalidated(self):
        solution = HubSolution.from_hubs(self.instance, [0, 2])
        self.assertFalse(solution.is_cost_cached)

        cost = solution.get_cost(self.instance)
        self.assertTrue(solution.is_cost_cached)
        self.assertAlmostEqual(cost, 30.0)

        solution.open_hub(1)
        self.assertFalse(solution.is_cost_cached)
        self.assertAlmostEqual(solution.get_cost(self.instance), 40.0)

    def test_copy_is_independent(self):
        solution = HubSolution.from_hubs(self.instance, [1])
        copied = solution.copy()
        copied.open_hub(0)

        self.assertEqual(solution.hubs, {1})
        self.assertEqual(list(solution.assignment), [1, 1, 1])
        self.assertNotEqual(copied, solution)

    def test_close_last_hub_raises(self):
        solution = HubSolution.from_hubs(self.instance, [1])
        with self.assertRaises(InfeasibleMoveError):
            solution.close_hub(self.instance, 1)
        self.assertEqual(solution.hubs, {1})

    def test_close_hub_reallocates(self):
        solution = HubSolution.from_hubs(self.instance, [0, 1])
        moved = solution.close_hub(self.instance, 0)

        self.assertEqual(moved, [0])
        self.assertEqual(solution.hubs, {1})
        self.assertEqual(list(solution.assignment), [1, 1, 1])

    def test_assign_rejects_closed_hub(self):
        solution = HubSolution.from_hubs(self.instance, [0, 2])
        with self.assertRaises(InfeasibleMoveError):
            solution.assign(1, 1)
        with self.assertRaises(InfeasibleMoveError):
            solution.assign(0, 2)

    def test_to_dict(self):
        solution = HubSolution.from_hubs(self.instance, [2, 0])
        data = solution.to_dict(self.instance)
        self.assertEqual(data['hubs'], [0, 2])
        self.assertEqual(data['assignment'], [0, 0, 2])
        self.assertAlmostEqual(data['cost'], 30.0)
        self.assertEqual(data['hub_count'], 2)


if __name__ == '__main__':
    unittest.main()
