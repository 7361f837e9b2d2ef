"""
Linear ion drift (HP TiO2) model and its Biolek / Joglekar window variants.

State w is the width of the doped region, w in [0, D]:

    M(w)  = R_ON * w/D + R_OFF * (1 - w/D)
    dw/dt = mu_v * R_ON/D * i(t) * f(w/D, i)

with f = 1 for plain linear drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from memristor_sim.model_registry import ModelSpec, register_model
from memristor_sim.models.base import MemristorModel, ModelKind


@dataclass(frozen=True)
class LinearIonDriftParams:
    mu_v: float = 1e-9  # dopant mobility, m^2/(V s)
    D: float = 1e-8  # film thickness, m
    R_ON: float = 100.0
    R_OFF: float = 16e3
    w_init: Optional[float] = None  # None -> D/2


@dataclass(frozen=True)
class BiolekParams(LinearIonDriftParams):
    p: float = 1


@dataclass(frozen=True)
class JoglekarParams(LinearIonDriftParams):
    p: float = 1


class LinearIonDriftMemristor(MemristorModel):
    kind = ModelKind.LINEAR
    params_type = LinearIonDriftParams

    @property
    def domain(self) -> Tuple[float, float]:
        return 0.0, self.params.D

    def _initial_state(self) -> float:
        p = self.params
        return p.D / 2 if p.w_init is None else p.w_init

    @property
    def memristance(self) -> float:
        p = self.params
        x = self._state / p.D
        return p.R_ON * x + p.R_OFF * (1 - x)

    @property
    def conductance(self) -> float:
        return 1.0 / self.memristance

    def window(self, x: float, i: float) -> float:
        return 1.0

    def advance(self, v: float, dt: float) -> None:
        p = self.params
        i = self.current(v)
        f_w = self.window(self._state / p.D, i)
        dw_dt = p.mu_v * (np.float64(p.R_ON) / p.D) * i * f_w
        self._set_state(self._state + dw_dt * dt)


class BiolekMemristor(LinearIonDriftMemristor):
    """Biolek window: f(x, i) = 1 - (x - stp(-i))^(2p).

    The window depends on the current direction, so a device pinned at a
    boundary can still be driven away from it.
    """

    kind = ModelKind.BIOLEK
    params_type = BiolekParams

    @staticmethod
    def step(z: float) -> float:
        return 1.0 if z >= 0 else 0.0

    def window(self, x: float, i: float) -> float:
        # |.| keeps the even power real for non-integer p
        return 1.0 - abs(x - self.step(-i)) ** (2 * self.params.p)


class JoglekarMemristor(LinearIonDriftMemristor):
    kind = ModelKind.JOGLEKAR
    params_type = JoglekarParams

    def window(self, x: float, i: float) -> float:
        return 1.0 - abs(2 * x - 1) ** (2 * self.params.p)


register_model(
    ModelSpec(
        kind=ModelKind.LINEAR,
        model_type=LinearIonDriftMemristor,
        description="Linear ion drift (HP) model without a window function.",
    )
)
register_model(
    ModelSpec(
        kind=ModelKind.BIOLEK,
        model_type=BiolekMemristor,
        description="Linear ion drift with the current-dependent Biolek window.",
    )
)
register_model(
    ModelSpec(
        kind=ModelKind.JOGLEKAR,
        model_type=JoglekarMemristor,
        description="Linear ion drift with the symmetric Joglekar window.",
    )
)
