from __future__ import annotations

from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, model_validator


class ExplicitGridConfig(BaseModel):
    kind: Literal["explicit"]
    latitudes_deg: List[float]
    longitudes_deg: List[float]

    @model_validator(mode="after")
    def _non_empty(self) -> "ExplicitGridConfig":
        if not self.latitudes_deg or not self.longitudes_deg:
            raise ValueError("explicit grid needs at least one latitude and one longitude")
        return self


class UniformGridConfig(BaseModel):
    kind: Literal["uniform"]
    lat_range_deg: tuple[float, float]
    lon_range_deg: tuple[float, float]
    n_lat: int = Field(gt=0)
    n_lon: int = Field(gt=0)


class SpinningGridConfig(BaseModel):
    kind: Literal["spinning"]
    vertical_angles_deg: List[float]
    azimuth_step_deg: float = Field(gt=0.0)


class PlanarGridConfig(BaseModel):
    kind: Literal["planar"]
    fov_deg: float = Field(gt=0.0, le=360.0)
    n_beams: int = Field(gt=0)


GridConfig = Annotated[
    Union[ExplicitGridConfig, UniformGridConfig, SpinningGridConfig, PlanarGridConfig],
    Field(discriminator="kind"),
]


class PlaneConfig(BaseModel):
    normal: tuple[float, float, float]
    offset: Optional[float] = None
    point: Optional[tuple[float, float, float]] = None

    @model_validator(mode="after")
    def _one_anchor(self) -> "PlaneConfig":
        if (self.offset is None) == (self.point is None):
            raise ValueError("plane needs exactly one of 'offset' or 'point'")
        if all(c == 0.0 for c in self.normal):
            raise ValueError("plane normal must be non-zero")
        return self


class SceneConfig(BaseModel):
    preset: Optional[Literal["floor", "room", "corridor", "ramp"]] = None
    size_m: float = Field(default=10.0, gt=0.0)
    planes: List[PlaneConfig] = Field(default_factory=list)


class StaticTrajectoryConfig(BaseModel):
    kind: Literal["static"]
    xyz: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rpy_deg: tuple[float, float, float] = (0.0, 0.0, 0.0)
    start_time_s: float = 0.0


class PolylineTrajectoryConfig(BaseModel):
    kind: Literal["polyline"]
    waypoints: List[tuple[float, float, float]] = Field(min_length=2)
    speed_mps: float = Field(gt=0.0)
    start_time_s: float = 0.0


TrajectoryConfig = Annotated[
    Union[StaticTrajectoryConfig, PolylineTrajectoryConfig],
    Field(discriminator="kind"),
]


class ScenarioConfig(BaseModel):
    grid: GridConfig
    scene: SceneConfig = SceneConfig()
    trajectory: TrajectoryConfig = StaticTrajectoryConfig(kind="static")
    num_frames: int = Field(default=1, gt=0)
    with_cloud: bool = False


def load_config(path: str | Path) -> ScenarioConfig:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError("Configuration root must be a mapping.")
    return ScenarioConfig.model_validate(data)
