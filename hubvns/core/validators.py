"""
Validation layer for the Hub-VNS solver.
Provides validators for configuration dictionaries and solver settings.
"""

from typing import Dict
from hubvns.core.exceptions import InvalidConfigurationError


VALID_EXECUTORS = ('thread', 'process')


class ConfigValidator:
    """Validate configuration parameters."""

    @staticmethod
    def validate_grasp_config(config: Dict) -> bool:
        """
        Validate GRASP configuration.

        Args:
            config: GRASP configuration dictionary

        Returns:
            True if valid, raises InvalidConfigurationError otherwise
        """
        if 'alpha' not in config:
            raise InvalidConfigurationError(
                parameter='alpha',
                value=None,
                expected="Required parameter"
            )

        if not 0 <= config['alpha'] <= 1:
            raise InvalidConfigurationError(
                parameter='alpha',
                value=config['alpha'],
                expected="[0, 1]"
            )

        max_hubs = config.get('max_hubs')
        if max_hubs is not None and max_hubs < 1:
            raise InvalidConfigurationError(
                parameter='max_hubs',
                value=max_hubs,
                expected=">= 1 or None"
            )

        return True

    @staticmethod
    def validate_vns_config(config: Dict) -> bool:
        """
        Validate VNS configuration.

        Args:
            config: VNS configuration dictionary

        Returns:
            True if valid, raises InvalidConfigurationError otherwise
        """
        required_keys = ['local_search_iterations', 'improvement_epsilon', 'log_interval']

        for key in required_keys:
            if key not in config:
                raise InvalidConfigurationError(
                    parameter=key,
                    value=None,
                    expected="Required parameter"
                )

        if config['local_search_iterations'] < 0:
            raise InvalidConfigurationError(
                parameter='local_search_iterations',
                value=config['local_search_iterations'],
                expected=">= 0"
            )

        if config['improvement_epsilon'] < 0:
            raise InvalidConfigurationError(
                parameter='improvement_epsilon',
                value=config['improvement_epsilon'],
                expected=">= 0"
            )

        if config['log_interval'] < 1:
            raise InvalidConfigurationError(
                parameter='log_interval',
                value=config['log_interval'],
                expected=">= 1"
            )

        return True

    @staticmethod
    def validate_solver_config(config) -> bool:
        """
        Validate a SolverConfig.

        Args:
            config: SolverConfig instance

        Returns:
            True if valid, raises InvalidConfigurationError otherwise
        """
        if config.num_workers < 1:
            raise InvalidConfigurationError(
                parameter='num_workers',
                value=config.num_workers,
                expected=">= 1"
            )

        if config.time_limit is None and config.max_iterations is None:
            raise InvalidConfigurationError(
                parameter='time_limit',
                value=None,
                expected="time_limit or max_iterations must be set"
            )

        if config.time_limit is not None and config.time_limit <= 0:
            raise InvalidConfigurationError(
                parameter='time_limit',
                value=config.time_limit,
                expected="> 0 or None"
            )

        if config.max_iterations is not None and config.max_iterations < 1:
            raise InvalidConfigurationError(
                parameter='max_iterations',
                value=config.max_iterations,
                expected=">= 1 or None"
            )

        if config.local_search_iterations < 0:
            raise InvalidConfigurationError(
                parameter='local_search_iterations',
                value=config.local_search_iterations,
                expected=">= 0"
            )

        if not 0 <= config.grasp_alpha <= 1:
            raise InvalidConfigurationError(
                parameter='grasp_alpha',
                value=config.grasp_alpha,
                expected="[0, 1]"
            )

        if config.executor not in VALID_EXECUTORS:
            raise InvalidConfigurationError(
                parameter='executor',
                value=config.executor,
                expected=f"one of {VALID_EXECUTORS}"
            )

        return True
