"""math utility functions for rating systems"""
import math
from scipy.special import expit


def sigmoid(x):
    """a little faster than implementing it in numpy for d < 100000"""
    return expit(x)


def sigmoid_scalar(x):
    """no need to use numpy on scalars"""
    return 1.0 / (1.0 + math.exp(-x))


def base_10_sigmoid(x):
    """some methods prefer base 10 unfortunately"""
    return 1.0 / (1.0 + (10.0**-x))
