"""
Solution validator for hub location problems.
Validates hub/allocation invariants and cost-cache consistency.
"""

from typing import Dict, List
import numpy as np
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution, evaluate_cost


class SolutionValidator:
    """Validates hub location solutions for correctness and feasibility."""

    def __init__(self, instance: HubInstance, tolerance: float = 1e-6):
        """
        Initialize solution validator.

        Args:
            instance: Problem instance
            tolerance: Relative tolerance for cost comparisons
        """
        self.instance = instance
        self.tolerance = tolerance

    def validate_solution(self, solution: HubSolution) -> Dict:
        """
        Validate a solution comprehensively.

        Args:
            solution: Solution to validate

        Returns:
            Validation results dictionary
        """
        errors = self._validate_structure(solution)

        if errors:
            return {
                'is_valid': False,
                'errors': errors,
                'cost': None,
                'cached_cost_consistent': None,
            }

        cached = solution._cost
        recomputed = evaluate_cost(self.instance, solution.hubs, solution.assignment)
        consistent = cached is None or bool(np.isclose(cached, recomputed, rtol=self.tolerance))
        if not consistent:
            errors.append(f"Cached cost {cached} differs from recomputed cost {recomputed}")

        return {
            'is_valid': len(errors) == 0,
            'errors': errors,
            'cost': recomputed,
            'cached_cost_consistent': consistent,
        }

    def _validate_structure(self, solution: HubSolution) -> List[str]:
        errors = []

        if not solution.hubs:
            errors.append("Solution has no hubs")
            return errors

        if solution.size != self.instance.size:
            errors.append(f"Assignment covers {solution.size} nodes, instance has {self.instance.size}")
            return errors

        out_of_range = [h for h in solution.hubs if h < 0 or h >= self.instance.size]
        if out_of_range:
            errors.append(f"Hubs out of range: {sorted(out_of_range)}")

        unserved = [n for n, hub in enumerate(solution.assignment) if int(hub) not in solution.hubs]
        if unserved:
            errors.append(f"Nodes allocated to closed hubs: {unserved}")

        not_self = [h for h in solution.hubs
                    if 0 <= h < self.instance.size and solution.assignment[h] != h]
        if not_self:
            errors.append(f"Hubs not allocated to themselves: {sorted(not_self)}")

        return errors
