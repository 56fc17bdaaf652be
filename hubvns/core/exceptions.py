"""
Custom exceptions for the Hub-VNS solver.
Provides specific exception classes for different error types.
"""


class HubLocationException(Exception):
    """Base exception for the hub location solver."""

    def __init__(self, message: str = "", details: dict = None):
        """
        Initialize hub location exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInstanceError(HubLocationException):
    """Raised when a problem instance is structurally invalid (e.g. size <= 0)."""

    def __init__(self, reason: str = None, size: int = None):
        """
        Initialize invalid instance error.

        Args:
            reason: Why the instance was rejected
            size: Declared instance size
        """
        message = "Invalid problem instance"
        details = {}

        if size is not None:
            details['size'] = size
        if reason:
            details['reason'] = reason
            message += f": {reason}"

        super().__init__(message, details)


class InstanceFormatError(HubLocationException):
    """Raised when an instance file cannot be parsed."""

    def __init__(self, reason: str = None, line_number: int = None,
                 token: str = None, file_path: str = None):
        """
        Initialize instance format error.

        Args:
            reason: Reason for failure
            line_number: 1-based line number in the input file
            token: Offending token, if any
            file_path: Path of the file being parsed
        """
        message = "Instance file format error"
        details = {}

        if file_path:
            details['file_path'] = file_path
        if line_number is not None:
            details['line_number'] = line_number
        if token is not None:
            details['token'] = token
        if reason:
            details['reason'] = reason

        if reason:
            message += f": {reason}"
            if line_number is not None:
                message += f" (line {line_number})"

        super().__init__(message, details)


class InfeasibleMoveError(HubLocationException):
    """Raised when a structural move would break solution invariants.

    Neighborhood operators catch this and degrade to a no-op; it never
    leaves the search engine.
    """

    def __init__(self, move: str = None, reason: str = None):
        message = "Infeasible move"
        details = {}

        if move:
            details['move'] = move
        if reason:
            details['reason'] = reason

        if move:
            message += f": {move}"
            if reason:
                message += f" ({reason})"

        super().__init__(message, details)


class InfeasibleSolutionError(HubLocationException):
    """Raised when a supplied solution violates hub/assignment invariants."""
    pass


class InvalidConfigurationError(HubLocationException):
    """Raised when configuration parameters are invalid."""

    def __init__(self, parameter: str = None, value: any = None,
                 expected: str = None):
        """
        Initialize invalid configuration error.

        Args:
            parameter: Parameter name
            value: Invalid value
            expected: Expected value or range
        """
        message = "Invalid configuration parameter"
        details = {}

        if parameter:
            details['parameter'] = parameter
        if value is not None:
            details['value'] = value
        if expected:
            details['expected'] = expected

        if parameter:
            message += f": {parameter} = {value}"
            if expected:
                message += f" (expected: {expected})"

        super().__init__(message, details)
