from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike, NDArray

from memristor_sim.config import SimulationConfig
from memristor_sim.errors import NumericInstability
from memristor_sim.features import add_iv_readouts
from memristor_sim.model_registry import create_model
from memristor_sim.models.base import MemristorModel
from memristor_sim.waveforms import generate_waveform

logger = logging.getLogger(__name__)


def _check_finite(step: int, quantity: str, value: float) -> None:
    if not math.isfinite(value):
        raise NumericInstability(step, quantity, float(value))


def _run_steps(
    model: MemristorModel,
    voltages: ArrayLike,
    dt: float,
    strict: bool,
    states: Optional[NDArray[np.float64]],
) -> NDArray[np.float64]:
    v_seq = np.asarray(voltages, dtype=float)
    currents = np.empty(v_seq.shape[0], dtype=float)

    # Overflow and NaN propagate into the output unless strict mode is on
    with np.errstate(all="ignore"):
        for k, v in enumerate(v_seq):
            # current is read from the state before this step's update
            i = model.current(v)
            if strict:
                _check_finite(k, "current", i)
            currents[k] = i
            model.advance(v, dt)
            if strict:
                _check_finite(k, "state", model.state)
            if states is not None:
                states[k] = model.state
    return currents


def simulate(
    model: MemristorModel,
    voltages: ArrayLike,
    dt: float,
    *,
    strict: bool = False,
) -> NDArray[np.float64]:
    """Drive `model` with a voltage sequence using fixed-step forward Euler.

    For each sample k the current is read first and the state is advanced
    afterwards with the same voltage, so currents[0] reflects the initial
    state. The model is mutated in place.

    Args:
        model: A freshly constructed device
        voltages: Voltage samples in V
        dt: Step size in seconds
        strict: Raise NumericInstability on the first non-finite current or
            state instead of letting it propagate

    Returns:
        Current samples in A, same length as `voltages`
    """
    return _run_steps(model, voltages, dt, strict, None)


def simulate_states(
    model: MemristorModel,
    voltages: ArrayLike,
    dt: float,
    *,
    strict: bool = False,
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Like `simulate`, also returning the state after each step."""
    n = np.asarray(voltages, dtype=float).shape[0]
    states = np.empty(n, dtype=float)
    currents = _run_steps(model, voltages, dt, strict, states)
    return currents, states


def time_vector(duration: float, dt: float) -> NDArray[np.float64]:
    n_points = math.floor(duration / dt)
    return np.arange(max(n_points, 0)) * dt


@dataclass
class SimulationResult:
    model: str
    waveform: str
    dt_s: float
    times: NDArray[np.float64]
    voltages: NDArray[np.float64]
    currents: NDArray[np.float64]
    states: NDArray[np.float64]

    @property
    def n_points(self) -> int:
        return int(self.times.shape[0])

    @property
    def status(self) -> str:
        return f"Simulation complete ({self.n_points} points)"

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame({
            "time_s": self.times,
            "voltage_V": self.voltages,
            "current_A": self.currents,
            "state": self.states,
        })
        return add_iv_readouts(df)


def run_simulation(cfg: SimulationConfig) -> SimulationResult:
    model = create_model(cfg.model, cfg.model_params)
    t = time_vector(cfg.duration_s, cfg.dt_s)
    v_seq = generate_waveform(cfg.waveform, t, cfg.frequency_Hz, cfg.amplitude_V)

    logger.info(
        "Simulating %s with %s drive: %d points, dt=%g s",
        cfg.model, cfg.waveform, t.shape[0], cfg.dt_s,
    )
    currents, states = simulate_states(model, v_seq, cfg.dt_s, strict=cfg.strict)

    return SimulationResult(
        model=cfg.model,
        waveform=cfg.waveform,
        dt_s=cfg.dt_s,
        times=t,
        voltages=v_seq,
        currents=currents,
        states=states,
    )
