from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from memristor_sim.model_registry import ModelSpec, register_model
from memristor_sim.models.base import MemristorModel, ModelKind


@dataclass(frozen=True)
class VTEAMParams:
    k_off: float = 5e-4
    k_on: float = -10.0
    alpha_off: float = 3.0
    alpha_on: float = 1.0
    w_off: float = 3e-9
    w_on: float = 0.0
    w_init: float = 0.0
    a_off: float = 0.8
    a_on: float = 0.2
    w_c: float = 0.12
    u_off: float = 0.5
    u_on: float = -0.5
    R_on: float = 100.0
    R_off: float = 2.5e3


class VTEAMMemristor(MemristorModel):
    """
    Voltage ThrEshold Adaptive Memristor (Kvatinsky et al., 2015).

    The state only moves once the applied voltage crosses u_off (positive) or
    u_on (negative). Resistance is exponential in w:

        R(w) = R_on * exp(lambda * (w - w_on) / (w_off - w_on)),  lambda = ln(R_off / R_on)
    """

    kind = ModelKind.VTEAM
    params_type = VTEAMParams

    @property
    def domain(self) -> Tuple[float, float]:
        return self.params.w_on, self.params.w_off

    def _initial_state(self) -> float:
        return self.params.w_init

    @property
    def _lambda(self) -> float:
        return np.log(np.float64(self.params.R_off) / self.params.R_on)

    def f_off(self, w: float) -> float:
        p = self.params
        return np.exp(-np.exp((w - p.a_off) / p.w_c))

    def f_on(self, w: float) -> float:
        p = self.params
        return np.exp(-np.exp(-(w - p.a_on) / p.w_c))

    @property
    def memristance(self) -> float:
        p = self.params
        return p.R_on * np.exp((self._lambda / (p.w_off - p.w_on)) * (self._state - p.w_on))

    @property
    def conductance(self) -> float:
        return 1.0 / self.memristance

    def current(self, u: float) -> float:
        p = self.params
        exp_term = np.exp((-self._lambda / (p.w_off - p.w_on)) * (self._state - p.w_on))
        return (u / p.R_on) * exp_term

    def rate(self, u: float) -> float:
        p = self.params
        if 0 < p.u_off < u:
            return p.k_off * np.power(u / p.u_off - 1, p.alpha_off) * self.f_off(self._state)
        if u < p.u_on < 0:
            return p.k_on * np.power(u / p.u_on - 1, p.alpha_on) * self.f_on(self._state)
        return 0.0

    def advance(self, u: float, dt: float) -> None:
        self._set_state(self._state + self.rate(u) * dt)


register_model(
    ModelSpec(
        kind=ModelKind.VTEAM,
        model_type=VTEAMMemristor,
        description="Threshold-driven VTEAM model with exponential resistance.",
    )
)
