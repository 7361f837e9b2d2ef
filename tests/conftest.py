"""Pytest configuration and fixtures for memristor_sim tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from memristor_sim import ModelKind, create_model, generate_waveform, time_vector


@pytest.fixture(params=[k.value for k in ModelKind])
def model_kind(request):
    """Parametrized over all six model kinds."""
    return request.param


@pytest.fixture
def fresh_model(model_kind):
    """Default-parameter instance of each model kind."""
    return create_model(model_kind)


@pytest.fixture
def sine_drive():
    """Two periods of a 10 kHz, 1 V sine sampled every 10 ns."""
    dt = 1e-8
    t = np.arange(2000) * dt
    v = generate_waveform("sine", t, 10e3, 1.0)
    return t, v, dt


@pytest.fixture
def constant_drive():
    """Constant 1 V for 100 steps of 1 ns."""
    return np.ones(100), 1e-9


@pytest.fixture
def quarter_grid():
    """One period at 1 Hz sampled at quarter periods."""
    return time_vector(1.0, 0.25)
