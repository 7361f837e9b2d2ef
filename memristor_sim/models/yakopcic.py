from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from memristor_sim.model_registry import ModelSpec, register_model
from memristor_sim.models.base import MemristorModel, ModelKind


@dataclass(frozen=True)
class YakopcicParams:
    A_p: float = 4000.0
    A_n: float = 4000.0
    U_p: float = 0.5
    U_n: float = 0.5
    alpha_p: float = 1.0
    alpha_n: float = 5.0
    x_p: float = 0.3
    x_n: float = 0.3
    a1: float = 0.17
    a2: float = 0.17
    b: float = 0.05
    x_init: float = 0.11
    x_on: float = 0.0


class YakopcicMemristor(MemristorModel):
    """
    Generalized memristor model of Yakopcic et al.

    dx/dt = g(V) * f(x, V). g(V) is a thresholded exponential drive; f limits
    the state motion once x passes x_p (positive bias) or 1 - x_n (negative
    bias). The I-V relation is a hyperbolic sine with separate amplitudes
    a1 / a2 for forward and reverse bias.
    """

    kind = ModelKind.YAKOPCIC
    params_type = YakopcicParams

    @property
    def domain(self) -> Tuple[float, float]:
        return self.params.x_on, 1.0

    def _initial_state(self) -> float:
        return self.params.x_init

    def g(self, u: float) -> float:
        p = self.params
        if u > p.U_p:
            return p.A_p * (np.exp(u) - np.exp(p.U_p))
        if u < -p.U_n:
            return -p.A_n * (np.exp(-u) - np.exp(p.U_n))
        return 0.0

    def f_p(self, x: float) -> float:
        p = self.params
        if x >= p.x_p:
            wp = (p.x_p - x) / (1 - p.x_p) + 1
            return np.exp(-p.alpha_p * (x - p.x_p)) * wp
        return 1.0

    def f_n(self, x: float) -> float:
        p = self.params
        if x <= 1 - p.x_n:
            wn = x / (1 - p.x_n)
            return np.exp(p.alpha_n * (x + p.x_n - 1)) * wn
        return 1.0

    def f(self, x: float, u: float) -> float:
        return self.f_p(x) if u >= 0 else self.f_n(x)

    @property
    def conductance(self) -> float:
        p = self.params
        return p.a1 * self._state * np.sinh(p.b)

    @property
    def memristance(self) -> float:
        w = self.conductance
        # x == 0 is a fully open device
        return np.inf if w == 0 else 1.0 / w

    def current(self, u: float) -> float:
        p = self.params
        a = p.a1 if u >= 0 else p.a2
        return a * self._state * np.sinh(p.b * u)

    def advance(self, u: float, dt: float) -> None:
        dx = self.g(u) * self.f(self._state, u)
        self._set_state(self._state + dx * dt)


register_model(
    ModelSpec(
        kind=ModelKind.YAKOPCIC,
        model_type=YakopcicMemristor,
        description="Yakopcic generalized model with sinh I-V and state-dependent drift limits.",
    )
)
