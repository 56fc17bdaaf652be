"""
Main application entry point for the Hub-VNS solver.
Provides a CLI to load or generate an instance, solve it, and export results.
"""

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from hubvns.data_processing.loader import InstanceLoader
from hubvns.data_processing.generator import InstanceGenerator
from hubvns.algorithms.solver import HubSolver, SolverConfig
from hubvns.evaluation.metrics import HubMetricsCalculator
from hubvns.evaluation.result_exporter import ResultExporter
from hubvns.core.logger import setup_logger
from hubvns.core.exceptions import HubLocationException
from config import SOLVER_CONFIG, GENERATOR_CONFIG, PATHS


def main(argv=None):
    """Main application entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    # Package-level logger: every hubvns.* module logger propagates here
    logger = setup_logger('hubvns', level=level, log_dir=PATHS['logs'])

    logger.info("=" * 60)
    logger.info("Hub-VNS Solver Starting")
    logger.info("=" * 60)

    if not args.instance and not args.generate:
        parser.print_help()
        return 1

    try:
        instance = load_or_generate_instance(args, logger)
        result = run_solver(instance, args, logger)
        print(result.summary())
        export_results(instance, result, args, logger)
        return 0

    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        print("\nOperation cancelled by user.")
        return 1
    except (HubLocationException, FileNotFoundError) as e:
        logger.error(f"Hub-VNS Error: {e}", exc_info=True)
        print(f"Error: {e}")
        return 1


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Hub-VNS: hub location solver using GRASP and Variable Neighborhood Search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve an instance file for 30 seconds with 4 workers
  python main.py --instance data/raw/ap10.txt --time-limit 30 --workers 4

  # Report the gap to a known optimum
  python main.py --instance data/raw/ap10.txt --target 224250.05

  # Deterministic run with a fixed iteration budget
  python main.py --instance data/raw/ap10.txt --max-iterations 500 --seed 7 --no-time-limit

  # Generate and solve a random 40-node instance, saving results and plot
  python main.py --generate --nodes 40 --save-solution --plot
        """
    )

    data_group = parser.add_mutually_exclusive_group()
    data_group.add_argument('--instance', type=str,
                            help='Path to instance file')
    data_group.add_argument('--generate', action='store_true',
                            help='Generate a random instance')

    parser.add_argument('--nodes', type=int, default=GENERATOR_CONFIG['n_nodes'],
                        help='Number of nodes for generated instances')
    parser.add_argument('--scale-factor', type=float, default=GENERATOR_CONFIG['scale_factor'],
                        help='Inter-hub discount for generated instances')

    parser.add_argument('--workers', type=int, default=SOLVER_CONFIG['num_workers'],
                        help='Number of parallel search workers')
    parser.add_argument('--executor', type=str, default=SOLVER_CONFIG['executor'],
                        choices=['thread', 'process'],
                        help='Worker pool type')
    parser.add_argument('--time-limit', type=float, default=SOLVER_CONFIG['time_limit'],
                        help='Wall-clock limit in seconds')
    parser.add_argument('--no-time-limit', action='store_true',
                        help='Disable the wall-clock limit (requires --max-iterations)')
    parser.add_argument('--max-iterations', type=int, default=SOLVER_CONFIG['max_iterations'],
                        help='VNS iterations per worker')
    parser.add_argument('--local-search-iterations', type=int,
                        default=SOLVER_CONFIG['local_search_iterations'],
                        help='Improving moves per local-search pass')
    parser.add_argument('--alpha', type=float, default=SOLVER_CONFIG['grasp_alpha'],
                        help='GRASP restricted candidate list parameter [0, 1]')
    parser.add_argument('--target', type=float,
                        help='Reference cost for GAP reporting')
    parser.add_argument('--seed', type=int,
                        help='Random seed')

    parser.add_argument('--output', type=str, default=PATHS['results'],
                        help='Output directory')
    parser.add_argument('--save-solution', action='store_true',
                        help='Export solution JSON, assignment CSV and convergence CSV')
    parser.add_argument('--plot', action='store_true',
                        help='Save a convergence plot')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')

    return parser


def load_or_generate_instance(args, logger):
    """Load the instance file or generate a random instance."""
    if args.generate:
        logger.info(f"Generating random instance: {args.nodes} nodes, "
                    f"scale factor {args.scale_factor}")
        generator = InstanceGenerator({
            'n_nodes': args.nodes,
            'scale_factor': args.scale_factor,
            'seed': args.seed if args.seed is not None else GENERATOR_CONFIG['seed'],
        })
        instance = generator.generate()
        if args.save_solution:
            path = InstanceLoader.save(instance, os.path.join(args.output, f"{instance.name}.txt"))
            logger.info(f"Generated instance saved to: {path}")
        return instance

    logger.info(f"Loading instance: {args.instance}")
    return InstanceLoader().load_from_file(args.instance)


def run_solver(instance, args, logger):
    """Configure and run the solver."""
    config = SolverConfig(
        num_workers=args.workers,
        time_limit=None if args.no_time_limit else args.time_limit,
        max_iterations=args.max_iterations,
        local_search_iterations=args.local_search_iterations,
        target_cost=args.target,
        seed=args.seed,
        grasp_alpha=args.alpha,
        executor=args.executor,
    )
    logger.info(f"Instance info: {instance.get_instance_info()}")

    return HubSolver(instance, config).solve()


def export_results(instance, result, args, logger):
    """Export solution files and plots when requested."""
    if not args.save_solution and not args.plot:
        return

    metrics = HubMetricsCalculator(instance).calculate_metrics(result.solution, result.target_cost)
    logger.info(f"Hubs: {metrics['hub_count']}, installation share: "
                f"{metrics['installation_share']:.2%}, "
                f"mean access distance: {metrics['mean_access_distance']:.4f}")

    if args.save_solution:
        exporter = ResultExporter(args.output)
        exporter.export_all(result, instance)

    if args.plot:
        from hubvns.visualization.plotter import Plotter
        os.makedirs(args.output, exist_ok=True)
        save_path = os.path.join(args.output, f"convergence_{instance.name or 'instance'}.png")
        Plotter().plot_convergence(result.history, target_cost=result.target_cost,
                                   save_path=save_path)
        logger.info(f"Convergence plot saved to: {save_path}")


if __name__ == '__main__':
    sys.exit(main())
