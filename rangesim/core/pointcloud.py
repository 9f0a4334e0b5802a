from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator
import numpy as np


@dataclass
class StructuredPointCloud:
    """Organised point cloud addressed by (column, row).

    ``xyz`` has shape ``(height, width, 3)``. Iterating visits every column of
    a row before moving to the next row, and ``at`` takes the column first,
    matching the layout of organised clouds from range sensors.
    """
    height: int = 0
    width: int = 0
    xyz: np.ndarray = field(default_factory=lambda: np.zeros((0, 0, 3), dtype=np.float64))

    def __post_init__(self) -> None:
        if self.height < 0 or self.width < 0:
            raise ValueError("height and width must be non-negative.")
        xyz = np.asarray(self.xyz, dtype=np.float64)
        if xyz.shape != (self.height, self.width, 3):
            if xyz.size == 0:
                xyz = np.zeros((self.height, self.width, 3), dtype=np.float64)
            else:
                raise ValueError(
                    f"xyz shape {xyz.shape} != ({self.height}, {self.width}, 3)"
                )
        self.xyz = xyz

    def resize(self, height: int, width: int) -> None:
        if height < 0 or width < 0:
            raise ValueError("height and width must be non-negative.")
        if (height, width) != (self.height, self.width):
            self.xyz = np.zeros((height, width, 3), dtype=np.float64)
            self.height = int(height)
            self.width = int(width)

    def at(self, column: int, row: int) -> np.ndarray:
        return self.xyz[row, column]

    def __len__(self) -> int:
        return self.height * self.width

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.points())

    def points(self) -> np.ndarray:
        """Flat ``(height * width, 3)`` view, column index varying fastest."""
        return self.xyz.reshape(-1, 3)
