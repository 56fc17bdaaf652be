"""
Search components for hub location.

This package contains:
- GRASP construction
- Shift / RemoveHub / AddHub / SwapFunction neighborhoods
- Allocation local search
- Variable Neighborhood Search engine and the parallel solver
"""

from .construction import GRASPConstructor, construct_solution
from .neighborhoods import (
    ShiftNeighborhood, RemoveHubNeighborhood, AddHubNeighborhood,
    SwapFunctionNeighborhood, build_neighborhoods
)
from .local_search import ShiftLocalSearch
from .vns import VariableNeighborhoodSearch
from .solver import HubSolver, SolverConfig, SolverResult, solve

__all__ = ['GRASPConstructor', 'construct_solution', 'ShiftNeighborhood',
           'RemoveHubNeighborhood', 'AddHubNeighborhood', 'SwapFunctionNeighborhood',
           'build_neighborhoods', 'ShiftLocalSearch', 'VariableNeighborhoodSearch',
           'HubSolver', 'SolverConfig', 'SolverResult', 'solve']
