"""
Search orchestrator: runs independent GRASP + VNS workers and keeps the best.

Each worker owns its random stream, its solutions and its VNS engine; the
instance is the only shared object and it is read-only.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional
import numpy as np
from hubvns.models.instance import HubInstance
from hubvns.models.solution import HubSolution
from hubvns.algorithms.construction import GRASPConstructor
from hubvns.algorithms.neighborhoods import build_neighborhoods
from hubvns.algorithms.local_search import ShiftLocalSearch
from hubvns.algorithms.vns import VariableNeighborhoodSearch
from hubvns.core.exceptions import InfeasibleSolutionError, InvalidInstanceError
from hubvns.core.validators import ConfigValidator
from hubvns.evaluation.metrics import calculate_gap
from config import GRASP_CONFIG, SOLVER_CONFIG, VNS_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """
    Solver settings.

    Attributes:
        num_workers: Independent parallel searches (>= 1)
        time_limit: Wall-clock seconds per run; None disables the deadline
        max_iterations: VNS iterations per worker; None runs until the deadline
        local_search_iterations: Improving moves allowed per local-search pass
        target_cost: Reference cost for GAP reporting; values <= 0 are dropped
        initial_solution: Starting solution that bypasses GRASP construction
        seed: Base seed; worker streams are spawned from it
        grasp_alpha: RCL greediness for construction
        executor: 'thread' or 'process'
    """
    num_workers: int = SOLVER_CONFIG['num_workers']
    time_limit: Optional[float] = SOLVER_CONFIG['time_limit']
    max_iterations: Optional[int] = SOLVER_CONFIG['max_iterations']
    local_search_iterations: int = SOLVER_CONFIG['local_search_iterations']
    target_cost: Optional[float] = SOLVER_CONFIG['target_cost']
    initial_solution: Optional[HubSolution] = None
    seed: Optional[int] = SOLVER_CONFIG['seed']
    grasp_alpha: float = SOLVER_CONFIG['grasp_alpha']
    executor: str = SOLVER_CONFIG['executor']

    def __post_init__(self):
        if self.target_cost is not None and self.target_cost <= 0:
            self.target_cost = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'SolverConfig':
        """Build a config from a dictionary; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass
class WorkerResult:
    """Outcome of one independent search."""
    worker_id: int
    solution: HubSolution
    cost: float
    initial_cost: float
    iterations: int
    elapsed: float
    history: List[float] = field(default_factory=list)
    improvements: int = 0

    def to_dict(self) -> Dict:
        return {
            'worker_id': self.worker_id,
            'cost': float(self.cost),
            'initial_cost': float(self.initial_cost),
            'iterations': self.iterations,
            'elapsed': self.elapsed,
            'improvements': self.improvements,
            'hub_count': self.solution.get_hub_count(),
        }


@dataclass
class SolverResult:
    """Global best over all workers plus run metadata."""
    solution: HubSolution
    cost: float
    elapsed: float
    target_cost: Optional[float] = None
    gap: Optional[float] = None
    worker_results: List[WorkerResult] = field(default_factory=list)
    history: List[float] = field(default_factory=list)

    @property
    def hubs(self) -> List[int]:
        return sorted(self.solution.hubs)

    @property
    def assignment(self) -> List[int]:
        return [int(a) for a in self.solution.assignment]

    def summary(self) -> str:
        """Human-readable result block."""
        lines = [
            "-------------- ",
            f"Time: {self.elapsed:.4f}",
            f"FO: {self.cost:.4f}",
            f"Hubs: {self.hubs}",
        ]
        if self.gap is not None:
            lines.append(f"GAP: {self.gap:.4f}%")
        lines.append("-------------- ")
        return "\n".join(lines)

    def to_dict(self) -> Dict:
        return {
            'cost': float(self.cost),
            'hubs': self.hubs,
            'assignment': self.assignment,
            'elapsed': self.elapsed,
            'target_cost': self.target_cost,
            'gap': self.gap,
            'workers': [w.to_dict() for w in self.worker_results],
        }


def run_worker(instance: HubInstance,
               worker_id: int,
               seed_sequence: np.random.SeedSequence,
               time_limit: Optional[float],
               max_iterations: Optional[int],
               local_search_iterations: int,
               grasp_alpha: float,
               initial_solution: Optional[HubSolution] = None,
               stop_event: Optional[threading.Event] = None) -> WorkerResult:
    """
    One complete search: construction (unless seeded) followed by VNS.

    Module-level so it can be shipped to a process pool.
    """
    start_time = time.monotonic()
    deadline = start_time + time_limit if time_limit is not None else None
    rng = np.random.default_rng(seed_sequence)

    if initial_solution is not None:
        solution = initial_solution.copy()
    else:
        grasp_config = GRASP_CONFIG.copy()
        grasp_config['alpha'] = grasp_alpha
        solution = GRASPConstructor(instance, grasp_config, rng).construct()

    initial_cost = solution.get_cost(instance)

    vns_config = VNS_CONFIG.copy()
    vns_config['local_search_iterations'] = local_search_iterations
    engine = VariableNeighborhoodSearch(
        instance,
        build_neighborhoods(rng),
        ShiftLocalSearch(instance, local_search_iterations, vns_config['improvement_epsilon']),
        vns_config
    )
    best = engine.run(solution, deadline=deadline, stop_event=stop_event,
                      max_iterations=max_iterations)

    return WorkerResult(
        worker_id=worker_id,
        solution=best,
        cost=best.get_cost(instance),
        initial_cost=initial_cost,
        iterations=engine.iteration,
        elapsed=time.monotonic() - start_time,
        history=engine.history,
        improvements=len(engine.improvements),
    )


class HubSolver:
    """Configures, times and reduces one or more parallel GRASP + VNS searches."""

    def __init__(self, instance: HubInstance, config: Optional[SolverConfig] = None):
        """
        Initialize solver.

        Args:
            instance: Validated problem instance
            config: Solver configuration (defaults from SOLVER_CONFIG)
        """
        if instance is None or instance.size <= 0:
            raise InvalidInstanceError("solver needs a non-empty instance",
                                       getattr(instance, 'size', None))

        self.instance = instance
        self.config = config or SolverConfig()
        ConfigValidator.validate_solver_config(self.config)

        initial = self.config.initial_solution
        if initial is not None and not initial.is_feasible(instance):
            raise InfeasibleSolutionError("Initial solution violates hub/allocation invariants")

        self._stop_event = threading.Event()
        self.result: Optional[SolverResult] = None

    def stop(self):
        """Ask running thread workers to stop at their next iteration."""
        self._stop_event.set()

    def solve(self) -> SolverResult:
        """
        Run all workers and return the global best.

        Returns:
            SolverResult
        """
        logger.info("Starting solver...")
        logger.info(f"Instance: {self.instance}, workers={self.config.num_workers}, "
                    f"time_limit={self.config.time_limit}, max_iterations={self.config.max_iterations}")

        self._stop_event.clear()
        start_time = time.monotonic()
        seeds = np.random.SeedSequence(self.config.seed).spawn(self.config.num_workers)

        if self.config.num_workers == 1:
            worker_results = [self._run_inline(seeds[0])]
        else:
            worker_results = self._run_parallel(seeds)

        # Reduction: strictly lower cost wins, so ties keep the first finisher
        best = None
        for worker_result in worker_results:
            if best is None or worker_result.cost < best.cost:
                best = worker_result

        elapsed = time.monotonic() - start_time
        gap = calculate_gap(best.cost, self.config.target_cost)

        self.result = SolverResult(
            solution=best.solution,
            cost=best.cost,
            elapsed=elapsed,
            target_cost=self.config.target_cost,
            gap=gap,
            worker_results=worker_results,
            history=best.history,
        )

        logger.info(f"Solver finished in {elapsed:.2f}s: cost={best.cost:.4f}, "
                    f"hubs={self.result.hubs} (worker {best.worker_id})")
        if gap is not None:
            logger.info(f"GAP to target {self.config.target_cost:.4f}: {gap:.4f}%")

        return self.result

    def _worker_kwargs(self, worker_id: int, seed_sequence: np.random.SeedSequence) -> Dict[str, Any]:
        return {
            'instance': self.instance,
            'worker_id': worker_id,
            'seed_sequence': seed_sequence,
            'time_limit': self.config.time_limit,
            'max_iterations': self.config.max_iterations,
            'local_search_iterations': self.config.local_search_iterations,
            'grasp_alpha': self.config.grasp_alpha,
            'initial_solution': self.config.initial_solution,
        }

    def _run_inline(self, seed_sequence: np.random.SeedSequence) -> WorkerResult:
        return run_worker(stop_event=self._stop_event, **self._worker_kwargs(0, seed_sequence))

    def _run_parallel(self, seeds: List[np.random.SeedSequence]) -> List[WorkerResult]:
        """Run workers concurrently; results are returned in completion order."""
        use_processes = self.config.executor == 'process'
        executor_cls = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
        results = []

        with executor_cls(max_workers=self.config.num_workers) as executor:
            futures = {}
            for worker_id, seed_sequence in enumerate(seeds):
                kwargs = self._worker_kwargs(worker_id, seed_sequence)
                if not use_processes:
                    kwargs['stop_event'] = self._stop_event
                futures[executor.submit(run_worker, **kwargs)] = worker_id

            for future in as_completed(futures):
                worker_result = future.result()
                logger.info(f"Worker {futures[future]} finished: cost={worker_result.cost:.4f}, "
                            f"iterations={worker_result.iterations}")
                results.append(worker_result)

        return results


def solve(instance: HubInstance, config: Optional[SolverConfig] = None) -> SolverResult:
    """
    Solve a hub location instance with parallel GRASP + VNS.

    Args:
        instance: Problem instance
        config: Solver configuration

    Returns:
        SolverResult with the global best solution
    """
    return HubSolver(instance, config).solve()
