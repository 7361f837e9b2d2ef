from __future__ import annotations

import logging
from typing import Callable, Dict

import numpy as np
from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)

TWO_PI = 2 * np.pi


def _phase(omega_t: NDArray[np.float64]) -> NDArray[np.float64]:
    # fmod keeps the sign of the dividend, like the % operator of most languages
    return np.fmod(omega_t, TWO_PI)


def _sine(omega_t: NDArray[np.float64], amplitude: float) -> NDArray[np.float64]:
    return amplitude * np.sin(omega_t)


def _square(omega_t: NDArray[np.float64], amplitude: float) -> NDArray[np.float64]:
    return amplitude * np.sign(np.sin(omega_t))


def _triangle(omega_t: NDArray[np.float64], amplitude: float) -> NDArray[np.float64]:
    phi = _phase(omega_t)
    return np.where(
        phi < np.pi,
        amplitude * (2 * phi / np.pi - 1),
        amplitude * (3 - 2 * phi / np.pi),
    )


def _sawtooth(omega_t: NDArray[np.float64], amplitude: float) -> NDArray[np.float64]:
    phi = _phase(omega_t)
    return amplitude * (2 * phi / TWO_PI - 1)


WAVEFORMS: Dict[str, Callable[[NDArray[np.float64], float], NDArray[np.float64]]] = {
    "sine": _sine,
    "square": _square,
    "triangle": _triangle,
    "sawtooth": _sawtooth,
}

DEFAULT_WAVEFORM = "sine"


def generate_waveform(
    family: str,
    times: ArrayLike,
    frequency: float,
    amplitude: float,
) -> NDArray[np.float64]:
    """Sample a periodic driving voltage at the given times.

    Args:
        family: 'sine', 'square', 'triangle' or 'sawtooth'. Anything else
            produces a sine wave.
        times: Sample times in seconds
        frequency: Frequency in Hz
        amplitude: Peak voltage in V

    Returns:
        Voltage array with the same length as `times`
    """
    t = np.asarray(times, dtype=float)
    key = str(family).strip().lower()
    fn = WAVEFORMS.get(key)
    if fn is None:
        logger.debug("Unknown waveform %r, using %s", family, DEFAULT_WAVEFORM)
        fn = WAVEFORMS[DEFAULT_WAVEFORM]
    omega = TWO_PI * frequency
    return fn(omega * t, amplitude)
