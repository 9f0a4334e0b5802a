import numpy as np
import pytest

from rangesim.examples.synthetic import generate_scene
from rangesim.motion.pose import Pose
from rangesim.motion.trajectory import StaticTrajectory, PolylineTrajectory
from rangesim.sensors.lidar import RayCaster
from rangesim.sensors.patterns import planar_grid, spinning_grid, uniform_grid


def test_pose_compose_and_inverse() -> None:
    a = Pose.from_xyz_rpy((1.0, 2.0, 3.0), (10.0, -20.0, 45.0))
    b = Pose.from_xyz_rpy((-4.0, 0.5, 1.0), (0.0, 30.0, -60.0))
    p = np.array([[0.3, -0.7, 2.0]])
    np.testing.assert_allclose(a.compose(b).apply(p), a.apply(b.apply(p)))
    ident = a.compose(a.inverse())
    np.testing.assert_allclose(ident.R, np.eye(3), atol=1e-12)
    np.testing.assert_allclose(ident.t, np.zeros(3), atol=1e-12)


def test_pose_matrix_round_trip_and_validation() -> None:
    pose = Pose.from_xyz_rpy((1.0, 2.0, 3.0), (0.0, 0.0, 90.0))
    again = Pose.from_matrix(pose.as_matrix())
    np.testing.assert_allclose(again.R, pose.R)
    np.testing.assert_allclose(again.t, pose.t)
    with pytest.raises(ValueError):
        Pose(t=np.zeros(3), R=np.diag([1.0, 1.0, -1.0]))
    with pytest.raises(ValueError):
        Pose.from_matrix(np.eye(3))


@pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
def test_pose_rejects_non_finite_translation(bad) -> None:
    with pytest.raises(ValueError):
        Pose(t=[bad, 0.0, 0.0], R=np.eye(3))
    T = np.eye(4)
    T[2, 3] = bad
    with pytest.raises(ValueError):
        Pose.from_matrix(T)


def test_pose_rejects_non_finite_rotation() -> None:
    R = np.eye(3)
    R[0, 1] = np.nan
    with pytest.raises(ValueError):
        Pose(t=np.zeros(3), R=R)


def test_static_trajectory_timeline() -> None:
    pose = Pose.from_xyz_rpy((0, 0, 10), (0, 0, 0))
    traj = StaticTrajectory(pose, start_time_s=5.0)
    timeline = list(traj.timeline())
    assert len(timeline) == 1 and timeline[0][0] == 5.0
    assert traj.sample(123.0) is pose
    frames = traj.frames(3)
    assert [t for t, _ in frames] == [5.0, 5.0, 5.0]


def test_polyline_trajectory_interpolates_midpoint() -> None:
    waypoints = [(0.0, 0.0, 0.0), (10.0, 0.0, 0.0)]
    traj = PolylineTrajectory(waypoints, speed_mps=2.0, start_time_s=0.0)
    pose_mid = traj.sample(2.5)
    np.testing.assert_allclose(pose_mid.t, np.array([5.0, 0.0, 0.0]))
    assert traj.duration_s == pytest.approx(5.0)


def test_polyline_trajectory_faces_along_segment() -> None:
    traj = PolylineTrajectory([(0.0, 0.0, 1.0), (0.0, 4.0, 1.0), (3.0, 4.0, 1.0)], speed_mps=1.0)
    heading = traj.sample(1.0).rotate(np.array([1.0, 0.0, 0.0]))
    np.testing.assert_allclose(heading, [0.0, 1.0, 0.0], atol=1e-12)
    frames = traj.frames(3)
    np.testing.assert_allclose([t for t, _ in frames], [0.0, 3.5, 7.0])
    np.testing.assert_allclose(frames[-1][1].t, [3.0, 4.0, 1.0])


def test_polyline_trajectory_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        PolylineTrajectory([(0.0, 0.0, 0.0)], speed_mps=1.0)
    with pytest.raises(ValueError):
        PolylineTrajectory([(0.0, 0.0, 0.0), (0.0, 0.0, 0.0)], speed_mps=1.0)
    with pytest.raises(ValueError):
        PolylineTrajectory([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)], speed_mps=0.0)


def test_uniform_grid_bounds() -> None:
    lat, lon = uniform_grid((-15.0, 15.0), (-180.0, 180.0), n_lat=16, n_lon=360)
    assert lat.shape == (16,) and lon.shape == (360,)
    assert np.isclose(lat[0], np.deg2rad(-15.0)) and np.isclose(lat[-1], np.deg2rad(15.0))
    caster = RayCaster(lat, lon)
    assert caster.shape == (16, 360)


def test_planar_grid_full_turn_drops_duplicate_beam() -> None:
    lat, lon = planar_grid(360.0, 8)
    assert lat.tolist() == [0.0]
    np.testing.assert_allclose(np.rad2deg(lon), np.arange(-180.0, 180.0, 45.0))
    _, narrow = planar_grid(90.0, 3)
    np.testing.assert_allclose(np.rad2deg(narrow), [-45.0, 0.0, 45.0])


def test_spinning_grid_channels_and_azimuths() -> None:
    lat, lon = spinning_grid([-15.0, 0.0, 15.0], azimuth_step_deg=1.0)
    assert lat.shape == (3,)
    assert lon.shape == (360,)
    assert np.all(np.abs(lon) <= np.pi)
    with pytest.raises(ValueError):
        spinning_grid([], 1.0)
    with pytest.raises(ValueError):
        spinning_grid([95.0], 1.0)


def test_room_preset_encloses_sensor() -> None:
    scene = generate_scene("room", size=4.0)
    assert len(scene) == 6
    lat, lon = uniform_grid((-60.0, 60.0), (-180.0, 170.0), n_lat=5, n_lon=36)
    ranges = RayCaster(lat, lon).compute_ranges(scene, Pose.identity())
    assert np.all(ranges <= 2.0 * np.sqrt(3.0) + 1e-9)
    assert np.all(ranges >= 2.0 - 1e-9)


def test_unknown_preset_raises() -> None:
    with pytest.raises(ValueError):
        generate_scene("cathedral")
