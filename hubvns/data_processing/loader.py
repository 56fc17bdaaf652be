"""
Instance loader for hub location text files.
Handles whitespace-separated numeric input and dimension validation.

File layout (blank lines are ignored anywhere):
    n
    scale_factor
    installation cost of node 0
    ...                                (n lines)
    distance row 0 (n values)
    ...                                (n lines)
    flow row 0 (n values)
    ...                                (n lines)
"""

import logging
import os
from typing import Iterator, List, Optional, Tuple
from hubvns.models.instance import HubInstance
from hubvns.core.exceptions import InstanceFormatError

logger = logging.getLogger(__name__)


class InstanceLoader:
    """Loads and parses hub location instance files."""

    def __init__(self):
        self.file_path = None
        self._lines: Optional[Iterator[Tuple[int, str]]] = None

    def load_from_file(self, file_path: str) -> HubInstance:
        """
        Load a hub location instance from a text file.

        Args:
            file_path: Path to instance file

        Returns:
            HubInstance

        Raises:
            FileNotFoundError: If the file does not exist
            InstanceFormatError: On malformed tokens, truncated input or wrong row length
            InvalidInstanceError: If the declared size is <= 0
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        self.file_path = file_path
        with open(file_path, 'r', encoding='utf-8') as f:
            instance = self.parse(f.read().splitlines(),
                                  name=os.path.splitext(os.path.basename(file_path))[0])

        logger.info(f"Loaded instance '{instance.name}': {instance.size} nodes, "
                    f"scale factor {instance.scale_factor}")
        return instance

    def parse(self, lines: List[str], name: Optional[str] = None) -> HubInstance:
        """
        Parse instance content given as a list of lines.

        Args:
            lines: Raw text lines
            name: Optional instance name

        Returns:
            HubInstance
        """
        self._lines = iter(enumerate(lines, start=1))

        size = int(self._next_values()[0])
        scale_factor = self._next_values()[0]

        installation_cost = [self._next_values()[0] for _ in range(max(size, 0))]
        distance = [self._next_row(size, f"distance matrix should have size {size}")
                    for _ in range(max(size, 0))]
        flow = [self._next_row(size, f"flow matrix should have dimension {size}x{size}")
                for _ in range(max(size, 0))]

        return HubInstance(size, scale_factor, installation_cost, distance, flow, name=name)

    def _next_values(self) -> List[float]:
        """Return the numbers of the next non-blank line."""
        for line_number, line in self._lines:
            values = self._parse_line(line, line_number)
            if values:
                return values

        raise InstanceFormatError("unexpected end of file", file_path=self.file_path)

    def _next_row(self, size: int, message: str) -> List[float]:
        values = self._next_values()
        if len(values) != size:
            raise InstanceFormatError(message, file_path=self.file_path)
        return values

    def _parse_line(self, line: str, line_number: int) -> List[float]:
        numbers = []
        for token in line.split():
            try:
                numbers.append(float(token))
            except ValueError:
                raise InstanceFormatError(
                    f"invalid number '{token}'",
                    line_number=line_number,
                    token=token,
                    file_path=self.file_path
                )
        return numbers

    @staticmethod
    def save(instance: HubInstance, file_path: str) -> str:
        """
        Write an instance in the same text format.

        Args:
            instance: Instance to write
            file_path: Destination path

        Returns:
            Path written
        """
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(f"{instance.size}\n")
            f.write(f"{instance.scale_factor}\n\n")
            for cost in instance.installation_cost:
                f.write(f"{cost}\n")
            f.write("\n")
            for row in instance.distance:
                f.write(" ".join(f"{value}" for value in row) + "\n")
            f.write("\n")
            for row in instance.flow:
                f.write(" ".join(f"{value}" for value in row) + "\n")

        return file_path


def load_instance(file_path: str) -> HubInstance:
    """
    Convenience function to load an instance file.

    Args:
        file_path: Path to instance file

    Returns:
        HubInstance
    """
    return InstanceLoader().load_from_file(file_path)
