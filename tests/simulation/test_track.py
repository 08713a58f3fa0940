import pytest

from gpsfilter.sim.track import TrackParams, constant_velocity_track


def test_noise_free_track_is_exact():
    fixes = constant_velocity_track(TrackParams(lat0=1.0, lon0=2.0, dlat=0.5, dlon=-0.25, dt=2.0), 4)
    assert [(f.lat, f.lon) for f in fixes] == [(1.0, 2.0), (2.0, 1.5), (3.0, 1.0), (4.0, 0.5)]
    assert all(f.dt == 2.0 for f in fixes)


def test_same_seed_same_track():
    p = TrackParams(noise_deg=1e-4)
    a = constant_velocity_track(p, 50, seed=9)
    b = constant_velocity_track(p, 50, seed=9)
    c = constant_velocity_track(p, 50, seed=10)
    assert a == b
    assert a != c
    spread = max(abs(f.lat) for f in a)
    assert 0.0 < spread < 1e-3


def test_empty_track():
    assert constant_velocity_track(TrackParams(), 0) == []
    assert len(constant_velocity_track(TrackParams(), 3)) == 3


def test_noise_free_ignores_seed():
    p = TrackParams(dlat=1e-4)
    assert constant_velocity_track(p, 5, seed=1) == constant_velocity_track(p, 5, seed=2)
    assert constant_velocity_track(p, 5)[-1].lat == pytest.approx(4e-4)
