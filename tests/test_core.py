"""
Unit tests for the core layer: exceptions, config validation and logging.
"""

import logging
import os
import sys
import tempfile
import unittest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hubvns.core.exceptions import (
    HubLocationException, InvalidInstanceError, InstanceFormatError,
    InfeasibleMoveError, InvalidConfigurationError
)
from hubvns.core.validators import ConfigValidator
from hubvns.core.logger import setup_logger, get_logger
from hubvns.algorithms.solver import SolverConfig
from config import GRASP_CONFIG, VNS_CONFIG


class TestExceptions(unittest.TestCase):
    """Test exception messages and details."""

    def test_hierarchy(self):
        for error in (InvalidInstanceError("x"), InstanceFormatError("x"),
                      InfeasibleMoveError("x"), InvalidConfigurationError("x")):
            self.assertIsInstance(error, HubLocationException)

    def test_format_error_message(self):
        error = InstanceFormatError("invalid number 'a'", line_number=4, token='a')
        self.assertEqual(error.details['line_number'], 4)
        self.assertIn("invalid number 'a' (line 4)", error.message)

    def test_configuration_error_message(self):
        error = InvalidConfigurationError('alpha', 2.0, "[0, 1]")
        self.assertIn("alpha = 2.0", str(error))
        self.assertEqual(error.details['expected'], "[0, 1]")


class TestConfigValidator(unittest.TestCase):
    """Test configuration validation."""

    def test_default_configs_are_valid(self):
        self.assertTrue(ConfigValidator.validate_grasp_config(GRASP_CONFIG))
        self.assertTrue(ConfigValidator.validate_vns_config(VNS_CONFIG))
        self.assertTrue(ConfigValidator.validate_solver_config(SolverConfig()))

    def test_grasp_alpha_range(self):
        with self.assertRaises(InvalidConfigurationError):
            ConfigValidator.validate_grasp_config({'alpha': 1.5})
        with self.assertRaises(InvalidConfigurationError):
            ConfigValidator.validate_grasp_config({'alpha': 0.2, 'max_hubs': 0})

    def test_vns_missing_key(self):
        config = VNS_CONFIG.copy()
        del config['log_interval']
        with self.assertRaises(InvalidConfigurationError):
            ConfigValidator.validate_vns_config(config)

    def test_solver_limits(self):
        with self.assertRaises(InvalidConfigurationError):
            ConfigValidator.validate_solver_config(SolverConfig(time_limit=0))
        with self.assertRaises(InvalidConfigurationError):
            ConfigValidator.validate_solver_config(SolverConfig(max_iterations=0))
        with self.assertRaises(InvalidConfigurationError):
            ConfigValidator.validate_solver_config(SolverConfig(grasp_alpha=-0.1))


class TestLogger(unittest.TestCase):
    """Test logger setup."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.name = 'hubvns_test_logger'

    def tearDown(self):
        logger = logging.getLogger(self.name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        self.temp_dir.cleanup()

    def test_setup_writes_log_file(self):
        log_file = os.path.join(self.temp_dir.name, 'run.log')
        logger = setup_logger(self.name, log_file=log_file, level=logging.DEBUG)
        logger.debug("debug line")

        for handler in logger.handlers:
            handler.flush()

        with open(log_file, encoding='utf-8') as f:
            content = f.read()
        self.assertIn("debug line", content)
        self.assertEqual(len(logger.handlers), 2)

    def test_handlers_not_duplicated(self):
        first = setup_logger(self.name, log_dir=self.temp_dir.name)
        second = get_logger(self.name)
        self.assertIs(first, second)
        self.assertEqual(len(second.handlers), 2)


if __name__ == '__main__':
    unittest.main()
