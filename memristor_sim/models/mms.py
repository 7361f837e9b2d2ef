from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from memristor_sim.model_registry import ModelSpec, register_model
from memristor_sim.models.base import MemristorModel, ModelKind

Q_ELECTRON = 1.602176634e-19  # C
K_BOLTZMANN = 1.380649e-23  # J/K


@dataclass(frozen=True)
class MMSParams:
    R_on: float = 500.0
    R_off: float = 1500.0
    U_on: float = 0.27
    U_off: float = 0.27
    tau: float = 1e-4
    T: float = 298.5
    x_init: float = 0.0


class MMSMemristor(MemristorModel):
    """
    Mean metastable switch model (Molter & Nugent).

    x in [0, 1] is the fraction of metastable switches in the ON state. Each
    step moves a fraction P_on of the OFF switches ON and a fraction P_off of
    the ON switches OFF, so this is a discrete update rather than a rate law.
    """

    kind = ModelKind.MMS
    params_type = MMSParams

    @property
    def domain(self) -> Tuple[float, float]:
        return 0.0, 1.0

    def _initial_state(self) -> float:
        return self.params.x_init

    @property
    def conductance(self) -> float:
        p = self.params
        return self._state / p.R_on + (1.0 - self._state) / p.R_off

    def current(self, v: float) -> float:
        return v * self.conductance

    def transition_probabilities(self, v: float, dt: float) -> Tuple[float, float]:
        p = self.params
        alpha = np.float64(dt) / p.tau
        beta = np.float64(Q_ELECTRON) / (K_BOLTZMANN * p.T)
        p_on = alpha / (1 + np.exp(-beta * (v - p.U_on)))
        p_off = alpha * (1 - 1 / (1 + np.exp(-beta * (v + p.U_off))))
        return p_on, p_off

    def advance(self, v: float, dt: float) -> None:
        p_on, p_off = self.transition_probabilities(v, dt)
        x = self._state
        n_on = p_on * (1 - x)
        n_off = p_off * x
        self._set_state(x + n_on - n_off)


register_model(
    ModelSpec(
        kind=ModelKind.MMS,
        model_type=MMSMemristor,
        description="Mean metastable switch model with thermally activated switching.",
    )
)
