"""rangesim – LIDAR range simulation against scenes of infinite planes.

The package is organised around a single sensor model and its supports:
- RayCaster & ScanResult (sensors.lidar)
- Plane & PlaneScene (core.scene)
- Ray/plane intersection and the NO_HIT sentinel (core.intersector)
- StructuredPointCloud (core.pointcloud)
- Pose & trajectories (motion)
- Angle-grid builders (sensors.patterns)
"""

from .core.scene import Plane, PlaneScene
from .core.intersector import (NO_HIT, RayBundle, RayHits, PlaneIntersector,
                               hit_mask, intersection_parameters)
from .core.pointcloud import StructuredPointCloud
from .motion.pose import Pose
from .motion.trajectory import StaticTrajectory, PolylineTrajectory
from .sensors.lidar import RayCaster, ScanResult
from .sensors.patterns import uniform_grid, planar_grid, spinning_grid
