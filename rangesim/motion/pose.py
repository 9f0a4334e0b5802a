from __future__ import annotations
from dataclasses import dataclass
import numpy as np

@dataclass
class Pose:
    t: np.ndarray   # (3,)
    R: np.ndarray   # (3,3)

    def __post_init__(self) -> None:
        self.t = np.asarray(self.t, dtype=np.float64).reshape(-1)
        self.R = np.asarray(self.R, dtype=np.float64)
        if self.t.shape != (3,):
            raise ValueError(f"Pose translation must have 3 components, got {self.t.shape}.")
        if not np.all(np.isfinite(self.t)):
            raise ValueError("Pose translation must be finite.")
        if self.R.shape != (3, 3):
            raise ValueError(f"Pose rotation must be 3x3, got {self.R.shape}.")
        if not np.allclose(self.R @ self.R.T, np.eye(3), atol=1e-6) or np.linalg.det(self.R) <= 0.0:
            raise ValueError("Pose rotation must be a proper orthonormal matrix.")

    @staticmethod
    def identity() -> "Pose":
        return Pose(t=np.zeros(3), R=np.eye(3))

    @staticmethod
    def from_xyz_rpy(xyz: tuple[float,float,float], rpy_deg: tuple[float,float,float]) -> "Pose":
        rx, ry, rz = np.deg2rad(rpy_deg)
        cx, sx = np.cos(rx), np.sin(rx)
        cy, sy = np.cos(ry), np.sin(ry)
        cz, sz = np.cos(rz), np.sin(rz)
        Rx = np.array([[1,0,0],[0,cx,-sx],[0,sx,cx]])
        Ry = np.array([[cy,0,sy],[0,1,0],[-sy,0,cy]])
        Rz = np.array([[cz,-sz,0],[sz,cz,0],[0,0,1]])
        R = Rz @ Ry @ Rx
        return Pose(t=np.array(xyz, dtype=float), R=R.astype(float))

    @staticmethod
    def from_matrix(T: np.ndarray) -> "Pose":
        """Build a pose from a 4x4 homogeneous transform."""
        T = np.asarray(T, dtype=np.float64)
        if T.shape != (4, 4):
            raise ValueError(f"Homogeneous transform must be 4x4, got {T.shape}.")
        if not np.allclose(T[3], [0.0, 0.0, 0.0, 1.0]):
            raise ValueError("Last row of a rigid transform must be [0, 0, 0, 1].")
        return Pose(t=T[:3, 3].copy(), R=T[:3, :3].copy())

    def as_matrix(self) -> np.ndarray:
        T = np.eye(4)
        T[:3, :3] = self.R
        T[:3, 3] = self.t
        return T

    def apply(self, p_body: np.ndarray) -> np.ndarray:
        return (self.R @ p_body.T).T + self.t

    def rotate(self, v_body: np.ndarray) -> np.ndarray:
        return (self.R @ np.asarray(v_body, dtype=np.float64).T).T

    def compose(self, other: "Pose") -> "Pose":
        """``self * other``: apply ``other`` first, then ``self``."""
        return Pose(t=self.R @ other.t + self.t, R=self.R @ other.R)

    def inverse(self) -> "Pose":
        R_inv = self.R.T
        return Pose(t=-(R_inv @ self.t), R=R_inv)
