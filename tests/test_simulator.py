import math

import pytest

from orrery.data_models import UNRESOLVED, Asteroid, Moon, Planet, PlanetRecord, Resolved, SceneState
from orrery.hierarchy import make_star, resolve_parents
from orrery.projection import project_xz
from orrery.simulator import Simulator, parent_of


def make_state(moons=None, asteroids=None):
    planets = [
        Planet.from_record(PlanetRecord("Earth", 200.0, 0.02, 10.0, (0, 0, 255))),
        Planet.from_record(PlanetRecord("Jupiter", 600.0, -0.005, 25.0, (200, 150, 100))),
    ]
    state = SceneState(star=make_star(), planets=planets, moons=moons or [], asteroids=asteroids or [])
    resolve_parents(state.moons, state.planets)
    return state


def test_planet_position_after_n_steps(front_view):
    state = make_state()
    earth = state.planets[0]
    earth.angle = 0.3
    sim = Simulator()
    for n in range(1, 51):
        sim.advance(state)
        if n % 3 == 0:
            sim.project(state, front_view)
            sim.project(state, front_view)
    theta = 0.3 + 50 * 0.02
    assert earth.angle == pytest.approx(theta)
    assert earth.world_position == pytest.approx((200.0 * math.cos(theta), 200.0 * math.sin(theta)))


def test_retrograde_planet_moves_backwards():
    state = make_state()
    Simulator().advance(state, ticks=10)
    assert state.planets[1].angle == pytest.approx(-0.05)


def test_projection_does_not_mutate_world(front_view):
    state = make_state()
    sim = Simulator()
    sim.advance(state)
    before = [(p.angle, p.world_x, p.world_z) for p in state.planets]
    sim.project(state, front_view)
    assert [(p.angle, p.world_x, p.world_z) for p in state.planets] == before


def test_moon_tracks_current_frame_parent_position():
    m = Moon(parent_name="Jupiter", orbit_radius=30.0, angular_speed=0.1, radius=3.0, color=(1, 1, 1))
    state = make_state(moons=[m])
    jupiter = state.planets[1]
    # Displace the parent and leave a stale world position behind.
    jupiter.angle = 2.0
    jupiter.world_x, jupiter.world_z = -99999.0, 99999.0

    Simulator().advance(state)

    expected_parent = (600.0 * math.cos(2.0 - 0.005), 600.0 * math.sin(2.0 - 0.005))
    assert jupiter.world_position == pytest.approx(expected_parent)
    assert m.world_x == pytest.approx(expected_parent[0] + 30.0 * math.cos(0.1))
    assert m.world_z == pytest.approx(expected_parent[1] + 30.0 * math.sin(0.1))


def test_unresolved_moon_is_skipped(front_view):
    lost = Moon(parent_name="Vulcan", orbit_radius=5.0, angular_speed=0.3, radius=2.0, color=(1, 1, 1), angle=1.0)
    found = Moon(parent_name="Earth", orbit_radius=5.0, angular_speed=0.3, radius=2.0, color=(2, 2, 2))
    state = make_state(moons=[lost, found])
    assert lost.parent is UNRESOLVED

    snapshot = Simulator().step(state, front_view)
    assert lost.angle == 1.0
    assert (lost.world_x, lost.world_z) == (0.0, 0.0)
    assert len(snapshot.moons) == 1
    assert snapshot.moons[0].color == (2, 2, 2)


def test_stale_parent_index_is_treated_as_unresolved(front_view):
    m = Moon(parent_name="Ghost", orbit_radius=5.0, angular_speed=0.3, radius=2.0, color=(1, 1, 1))
    state = make_state(moons=[m])
    m.parent = Resolved(17)
    assert parent_of(m, state.planets) is None
    snapshot = Simulator().step(state, front_view)
    assert snapshot.moons == []


def test_asteroids_advance_angle_only():
    rock = Asteroid(orbit_radius=450.0, angular_speed=0.012, angle=1.0)
    state = make_state(asteroids=[rock])
    Simulator().advance(state, ticks=2.5)
    assert rock.angle == pytest.approx(1.03)
    assert rock.world_position() == pytest.approx((450.0 * math.cos(1.03), 450.0 * math.sin(1.03)))


def test_snapshot_screen_radius_is_derived_from_depth(front_view):
    state = make_state()
    snapshot = Simulator().step(state, front_view)
    for p, body in zip(state.planets, snapshot.planets):
        sx, sy, depth = project_xz(p.world_x, p.world_z, front_view)
        assert (body.x, body.y, body.depth) == pytest.approx((sx, sy, depth))
        assert body.radius == pytest.approx(p.radius * front_view.fov / depth)
        assert body.name == p.name
    assert snapshot.star.radius == pytest.approx(30.0 * 800.0 / 1500.0)


def test_snapshot_contents(front_view):
    rocks = [Asteroid(450.0, 0.01, 0.0), Asteroid(420.0, 0.01, 1.0)]
    state = make_state(asteroids=rocks)
    snapshot = Simulator().step(state, front_view)
    assert len(snapshot.orbits) == 2
    assert len(snapshot.asteroids) == 2
    assert snapshot.highlight is None


def test_highlight_follows_selection(front_view):
    state = make_state()
    state.selected = 1
    snapshot = Simulator().step(state, front_view)
    body = snapshot.planets[1]
    assert snapshot.highlight == pytest.approx((body.x, body.y, body.radius + 6.0))
