import math

import pytest

from kickorbit.collisions import COLLISION, DEGENERATE, detect_contact
from kickorbit.data_models import Body, SimulationConfig
from kickorbit.errors import DegenerateConfiguration
from kickorbit.physics import (
    OrbitalStateModel,
    StepStatus,
    circular_orbit_velocity,
    escape_velocity,
)
from kickorbit.vector_utils import Vector2

G, M1, M2, R1, R2, D = 3700.0, 1000.0, 1.0, 20.0, 5.0, 150.0


def make_model(separation=D, origin=Vector2(400.0, 300.0)):
    return OrbitalStateModel.initialize(G, M1, M2, R1, R2, separation, origin=origin)


def test_initial_speed_is_circular():
    model = make_model()
    expected = math.sqrt(G * M1 / D)
    assert model.secondary.velocity.magnitude() == pytest.approx(expected, rel=1e-12)
    assert expected == pytest.approx(157.02, abs=0.05)


def test_initial_velocity_is_tangential():
    model = make_model()
    r = model.secondary.position.sub(model.primary.position)
    assert r == Vector2(D, 0.0)
    assert r.dot(model.secondary.velocity) == pytest.approx(0.0, abs=1e-9)
    assert model.secondary.velocity.y < 0
    assert model.primary.velocity == Vector2(0.0, 0.0)


def test_rotational_sense_does_not_depend_on_separation_sign():
    def angular_momentum(model):
        r = model.secondary.position.sub(model.primary.position)
        v = model.secondary.velocity
        return r.x * v.y - r.y * v.x

    assert angular_momentum(make_model(D)) < 0
    assert angular_momentum(make_model(-D)) < 0
    assert angular_momentum(make_model(-D)) == pytest.approx(angular_momentum(make_model(D)))


def test_zero_separation_is_degenerate():
    with pytest.raises(DegenerateConfiguration):
        make_model(0.0)


def test_from_config_uses_config_values():
    config = SimulationConfig(initial_separation=200.0, origin=Vector2(0.0, 0.0))
    model = OrbitalStateModel.from_config(config)
    assert model.secondary.position == Vector2(200.0, 0.0)
    assert model.secondary.velocity.magnitude() == pytest.approx(math.sqrt(3700.0 * 1000.0 / 200.0))


def test_single_step_scenario():
    model = make_model()
    p0 = model.secondary.position
    v0 = model.secondary.velocity
    dt = 0.01

    outcome = model.step(dt)

    assert outcome.status is StepStatus.CONTINUE
    assert not outcome.halted
    assert outcome.position == model.secondary.position

    a = G * M1 / D ** 2
    assert a == pytest.approx(164.4, abs=0.1)
    dv = model.secondary.velocity.sub(v0)
    assert dv.x == pytest.approx(-a * dt)
    assert dv.y == pytest.approx(0.0, abs=1e-12)

    displacement = model.secondary.position.sub(p0)
    assert displacement.magnitude() == pytest.approx(1.57, abs=0.01)
    # Semi-implicit Euler: position uses the already-updated velocity
    assert displacement.x == pytest.approx(-a * dt * dt)
    assert displacement.y == pytest.approx(v0.y * dt)


def test_primary_never_moves():
    model = make_model()
    for _ in range(50):
        model.step(0.01)
    assert model.primary.position == Vector2(400.0, 300.0)
    assert model.primary.velocity == Vector2(0.0, 0.0)


def test_orbit_stays_near_circular_over_one_period():
    model = make_model()
    e0 = model.specific_orbital_energy()
    for _ in range(600):
        outcome = model.step(0.01)
        assert not outcome.halted
        assert 0.95 * D < model.separation().magnitude() < 1.05 * D
    assert model.specific_orbital_energy() == pytest.approx(e0, rel=0.05)


def test_near_collision_halts_without_mutation():
    model = make_model(15.0)
    p0, v0 = model.secondary.position, model.secondary.velocity

    outcome = model.step(0.01)

    assert outcome.halted
    assert outcome.reason == COLLISION
    assert outcome.position is None
    assert model.secondary.position == p0
    assert model.secondary.velocity == v0


def test_collision_threshold_scales_squared_radius_sum():
    # |r|^2 < (20 + 5)^2 * 0.8, i.e. |r| < 22.36
    assert make_model(19.9).step(0.01).halted
    assert make_model(21.0).step(0.01).halted
    assert make_model(22.3).step(0.01).halted
    assert not make_model(22.4).step(0.01).halted
    assert not make_model(23.0).step(0.01).halted


def test_detect_contact_at_threshold_boundary():
    primary = Body("Primary", M1, R1, position=Vector2(0.0, 0.0))
    inside = Body("Secondary", M2, R2, position=Vector2(21.0, 0.0))
    outside = Body("Secondary", M2, R2, position=Vector2(0.0, -23.0))
    assert detect_contact(primary, inside, 0.8) == COLLISION
    assert detect_contact(primary, outside, 0.8) is None


def test_coincident_bodies_halt_as_degenerate():
    primary = Body("Primary", M1, R1, position=Vector2(1.0, 1.0))
    secondary = Body("Secondary", M2, R2, position=Vector2(1.0, 1.0))
    assert detect_contact(primary, secondary, 0.8) == DEGENERATE
    model = OrbitalStateModel(G, primary, secondary)
    outcome = model.step(0.01)
    assert outcome.halted and outcome.reason == DEGENERATE
    assert secondary.position == Vector2(1.0, 1.0)


def test_apply_kick_adds_polar_delta():
    model = make_model()
    v0 = model.secondary.velocity
    dv = model.apply_kick(90.0, 10.0)
    assert dv.x == pytest.approx(0.0, abs=1e-12)
    assert dv.y == pytest.approx(10.0)
    assert model.secondary.velocity.x == pytest.approx(v0.x)
    assert model.secondary.velocity.y == pytest.approx(v0.y + 10.0)


def test_apply_kick_is_not_clamped():
    model = make_model()
    v0 = model.secondary.velocity
    model.apply_kick(180.0, 1e6)
    assert model.secondary.velocity.x == pytest.approx(v0.x - 1e6)


def test_orbital_speed_helpers():
    assert circular_orbit_velocity(G, M1, D) == pytest.approx(math.sqrt(G * M1 / D))
    assert circular_orbit_velocity(G, M1, 0.0) == 0.0
    assert escape_velocity(G, M1, D) == pytest.approx(math.sqrt(2) * circular_orbit_velocity(G, M1, D))
    assert escape_velocity(G, M1, 0.0) == 0.0


def test_bound_orbit_energy_is_negative():
    model = make_model()
    assert model.specific_orbital_energy() == pytest.approx(-0.5 * G * M1 / D)


def test_escape_speed_at_current_separation():
    model = make_model()
    assert model.escape_speed() == pytest.approx(math.sqrt(2) * model.secondary.velocity.magnitude())
    model.step(0.01)
    r = model.separation().magnitude()
    assert model.escape_speed() == pytest.approx(escape_velocity(G, M1, r))
