"""
Hub-VNS: uncapacitated single-allocation hub location with GRASP + VNS.
"""

from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution, evaluate_cost
from hubvns.algorithms.solver import HubSolver, SolverConfig, SolverResult, solve

__all__ = ['HubInstance', 'HubSolution', 'evaluate_cost',
           'HubSolver', 'SolverConfig', 'SolverResult', 'solve']

__version__ = '1.0.0'
