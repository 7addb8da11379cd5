"""parameter presets for the rating models"""
from glickoboard.models import MODELS

default_params = {
    'glicko': {
        'initial_rating': 1500.0,
        'initial_rating_dev': 350.0,
        'min_rating_dev': 30.0,
        'idle_days': 5.0 * 365.0,
    },
    'glicko2': {
        'initial_rating': 1500.0,
        'initial_rd': 350.0,
        'initial_sigma': 0.06,
        'tau': 0.75,
        'epsilon': 1e-5,
        'max_iter': 30,
        'max_bracket_steps': 100,
    },
    'continuous_glicko2': {
        'initial_rating': 1500.0,
        'initial_rd': 350.0,
        'initial_sigma': 0.06,
        'tau': 0.75,
        'epsilon': 1e-5,
        'max_iter': 30,
        'max_bracket_steps': 100,
        'rating_period': 4.665,
        'max_rd': 350.0,
        'min_rd': 60.0,
        'max_sigma': 0.1,
        'decay_opponent': False,
    },
}

# older runs derived c from a deviation of 50 rather than 30, keeping the floor at 30
legacy_params = {
    **default_params,
    'glicko': {**default_params['glicko'], 'c': ((350.0**2.0 - 50.0**2.0) / (5.0 * 365.0)) ** 0.5},
}


def build_models(params=None):
    """instantiate one model per entry of a preset, keyed by model tag and kept in preset order"""
    if params is None:
        params = default_params
    models = {}
    for name, kwargs in params.items():
        if name not in MODELS:
            raise ValueError(f'unknown rating model: {name}')
        models[name] = MODELS[name](**kwargs)
    return models
