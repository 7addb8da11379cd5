"""
example from: http://www.glicko.net/glicko/glicko2.pdf
"""
import math
import itertools
import pytest
from glickoboard.core.errors import ConvergenceFailure
from glickoboard.models.glicko2 import Glicko2, Glicko2Rating, find_lower_bracket, illinois_root
from glickoboard.models.continuous_glicko2 import ContinuousGlicko2

SCALE = 173.7178


def test_initial_state():
    model = Glicko2()
    state = model.initial_state()
    assert state == Glicko2Rating(mu=0.0, phi=350.0 / SCALE, sigma=0.06)
    assert state.rating == pytest.approx(1500.0)
    assert state.rd == pytest.approx(350.0)


def test_sigma_prime_paper_example():
    # v, delta and phi of step 3 and 4 of the example, the example rounds to 4 decimals at each step
    model = Glicko2(tau=0.5)
    sigma_prime = model.get_sigma_prime(phi=1.1513, delta=-0.4834, v=1.7785, sigma=0.06)
    assert sigma_prime == pytest.approx(0.05999, abs=1e-5)


@pytest.mark.parametrize('model', [Glicko2(), ContinuousGlicko2()])
def test_fresh_players_win(model):
    fresh = model.initial_state()
    winner = model.update(fresh, 1.0, fresh)
    loser = model.update(fresh, 0.0, fresh)
    assert winner.mu > fresh.mu
    assert loser.mu < fresh.mu
    assert winner.mu == pytest.approx(-loser.mu)
    assert winner.phi < fresh.phi


def test_expect_complementary():
    model = Glicko2()
    a = Glicko2Rating(mu=0.4, phi=0.5, sigma=0.05)
    b = Glicko2Rating(mu=-0.3, phi=1.2, sigma=0.07)
    assert model.expect(a, b) > 0.5
    assert model.expect(a, b) + model.expect(b, a) == pytest.approx(1.0)


def test_no_time_decay():
    model = Glicko2()
    a = Glicko2Rating(mu=0.4, phi=0.5, sigma=0.05)
    b = Glicko2Rating(mu=-0.3, phi=1.2, sigma=0.07)
    assert model.update(a, 1.0, b) == model.update(a, 1.0, b, days=500.0, opponent_days=20.0)
    assert model.expect(a, b) == model.expect(a, b, days=500.0, opponent_days=20.0)


@pytest.mark.parametrize('model', [Glicko2(), ContinuousGlicko2()])
def test_solver_converges_over_operating_range(model):
    phis = [60.0 / SCALE, 120.0 / SCALE, 230.0 / SCALE, 350.0 / SCALE]
    sigmas = [0.01, 0.04, 0.07, 0.1]
    mus = [-2.0, 0.0, 2.0]
    for score, phi, opp_phi, sigma, mu in itertools.product([0.0, 0.5, 1.0], phis, phis, sigmas, mus):
        state = Glicko2Rating(mu=mu, phi=phi, sigma=sigma)
        opponent = Glicko2Rating(mu=0.0, phi=opp_phi, sigma=0.06)
        new = model.update(state, score, opponent, days=7.0, opponent_days=7.0)
        assert math.isfinite(new.mu)
        assert 0.0 < new.phi
        assert 0.0 < new.sigma < 1.0


def test_root_iteration_cap():
    model = Glicko2(max_iter=0)
    fresh = model.initial_state()
    with pytest.raises(ConvergenceFailure) as excinfo:
        model.update(fresh, 1.0, fresh)
    assert excinfo.value.stage == 'root'


def test_bracket_step_cap():
    with pytest.raises(ConvergenceFailure) as excinfo:
        find_lower_bracket(lambda x: -1.0, a=0.0, tau=0.5, max_steps=10)
    assert excinfo.value.stage == 'bracket'
    assert excinfo.value.iterations == 10


def test_lower_bracket():
    assert find_lower_bracket(lambda x: 1.0, a=0.0, tau=0.5, max_steps=10) == -0.5
    assert find_lower_bracket(lambda x: -x - 0.7, a=0.0, tau=0.5, max_steps=10) == -1.0


def test_illinois_root_linear():
    assert illinois_root(lambda x: 1.0 - x, 0.0, 3.0, epsilon=1e-5, max_iter=30) == pytest.approx(1.0)
