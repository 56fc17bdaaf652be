# Configuration parameters for the Hub-VNS solver
# Uncapacitated single-allocation hub location (GRASP + VNS)

# GRASP construction
GRASP_CONFIG = {
    # RCL greediness: 0.0 = pure greedy (random ties only), 1.0 = any improving candidate
    'alpha': 0.3,
    'max_hubs': None,            # Optional cap on hubs opened during construction
}

# Variable Neighborhood Search
VNS_CONFIG = {
    'local_search_iterations': 100,   # Max improving Shift moves per local-search pass
    'improvement_epsilon': 1e-9,      # Allocation deltas above -eps are not improvements
    'log_interval': 500,              # Progress log every N VNS iterations
}

# Solver / orchestrator defaults (see hubvns.algorithms.solver.SolverConfig)
SOLVER_CONFIG = {
    'num_workers': 1,
    'time_limit': 10.0,          # Seconds; None disables the wall-clock deadline
    'max_iterations': None,      # VNS iterations per worker; None = run until deadline
    'local_search_iterations': VNS_CONFIG['local_search_iterations'],
    'target_cost': None,         # Optional reference cost for GAP reporting
    'seed': None,
    'grasp_alpha': GRASP_CONFIG['alpha'],
    'executor': 'thread',        # 'thread' or 'process'
}

# Random instance generation
GENERATOR_CONFIG = {
    'n_nodes': 20,
    'area_bounds': (0, 100),            # Nodes uniform in [0,100]x[0,100]
    'flow_range': (0.0, 10.0),          # Uniform flow between distinct nodes
    'installation_cost_range': (500.0, 1500.0),
    'scale_factor': 0.75,               # AP-style inter-hub discount
    'seed': 42,
}

# Visualization Configuration
VIZ_CONFIG = {
    'figure_size': (12, 8),
    'dpi': 150,
    'line_width': 2,
    'font_size': 12
}

# File Paths
PATHS = {
    'data_raw': 'data/raw/',
    'results': 'results/',
    'logs': 'logs/',
}
