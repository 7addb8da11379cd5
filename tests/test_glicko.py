"""
formulas from: http://www.glicko.net/glicko/glicko.pdf
"""
import math
import itertools
import pytest
import numpy as np
from glickoboard.models.glicko import Glicko, GlickoRating


def test_initial_state():
    model = Glicko()
    assert model.initial_state() == GlickoRating(rating=1500.0, rd=350.0)
    model.update(model.initial_state(), 1.0, model.initial_state())
    assert model.initial_state() == GlickoRating(rating=1500.0, rd=350.0)


def test_fresh_players_win():
    model = Glicko()
    fresh = model.initial_state()
    new = model.update(fresh, 1.0, fresh)

    # closed form with both deviations at 350 and an expected score of 0.5
    q = math.log(10.0) / 400.0
    g = 1.0 / math.sqrt(1.0 + 3.0 * q**2.0 * 350.0**2.0 / math.pi**2.0)
    d2 = 1.0 / (q**2.0 * g**2.0 * 0.25)
    denom = 1.0 / 350.0**2.0 + 1.0 / d2
    assert new.rating == pytest.approx(1500.0 + (q / denom) * g * 0.5, abs=1e-3)
    assert new.rd == pytest.approx(math.sqrt(1.0 / denom), abs=1e-3)
    assert new.rating == pytest.approx(1662.21, abs=0.05)
    assert new.rd == pytest.approx(290.23, abs=0.05)


@pytest.mark.parametrize('rd', [30.0, 50.0, 120.0, 349.0, 350.0])
def test_idle_horizon_resets_deviation(rd):
    model = Glicko()
    state = GlickoRating(rating=1800.0, rd=rd)
    assert model.decayed_rd(state, 5.0 * 365.0) == pytest.approx(350.0)
    assert model.pre_match(state, 10 * 365.0) == (1800.0, 350.0)


def test_deviation_grows_with_time():
    model = Glicko()
    state = GlickoRating(rating=1500.0, rd=30.0)
    rds = [model.decayed_rd(state, days) for days in [0.0, 1.0, 30.0, 365.0, 1000.0]]
    assert rds[0] == 30.0
    assert all(a < b for a, b in zip(rds, rds[1:]))


def test_update_stays_in_bounds():
    model = Glicko()
    rds = [30.0, 75.0, 200.0, 350.0]
    ratings = [800.0, 1500.0, 2600.0]
    days = [0.0, 3.0, 4000.0]
    for score, rd, opp_rd, rating, opp_rating, day in itertools.product(
        [0.0, 0.5, 1.0], rds, rds, ratings, ratings, days
    ):
        new = model.update(
            GlickoRating(rating, rd), score, GlickoRating(opp_rating, opp_rd), days=day, opponent_days=day
        )
        assert 30.0 <= new.rd <= 350.0
        assert math.isfinite(new.rating)


def test_deviation_floor():
    model = Glicko()
    state = model.initial_state()
    opponent = GlickoRating(rating=1500.0, rd=30.0)
    for _ in range(500):
        state = model.update(state, 0.5, opponent)
    assert state.rd == 30.0


@pytest.mark.parametrize('days,opponent_days', [(0.0, 0.0), (10.0, 400.0), (2000.0, 1.0)])
def test_expect_complementary(days, opponent_days):
    model = Glicko()
    a = GlickoRating(rating=1620.0, rd=80.0)
    b = GlickoRating(rating=1480.0, rd=210.0)
    p_ab = model.expect(a, b, days=days, opponent_days=opponent_days)
    p_ba = model.expect(b, a, days=opponent_days, opponent_days=days)
    assert p_ab > 0.5
    assert p_ab + p_ba == pytest.approx(1.0)


def test_predict_matches_expect():
    model = Glicko()
    a = GlickoRating(rating=1620.0, rd=80.0)
    b = GlickoRating(rating=1480.0, rd=210.0)
    probs = model.predict(np.array([1620.0, 1480.0]), np.array([80.0, 210.0]), np.array([1480.0, 1620.0]), np.array([210.0, 80.0]))
    assert probs[0] == pytest.approx(model.expect(a, b))
    assert probs[1] == pytest.approx(model.expect(b, a))


def test_explicit_c():
    model = Glicko(c=63.2)
    assert model.c2 == pytest.approx(63.2**2.0)


def test_invalid_score():
    model = Glicko()
    with pytest.raises(ValueError):
        model.update(model.initial_state(), 0.7, model.initial_state())


def test_invalid_bounds():
    with pytest.raises(ValueError):
        Glicko(min_rating_dev=400.0)
