from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import fields, is_dataclass, replace
from typing import Any, ClassVar, Mapping, Tuple, Type

import numpy as np

from memristor_sim.errors import InvalidModelParameters


class ModelKind(str, enum.Enum):
    LINEAR = "linear"
    BIOLEK = "biolek"
    JOGLEKAR = "joglekar"
    VTEAM = "vteam"
    MMS = "mms"
    YAKOPCIC = "yakopcic"


def param_names(params_type: type) -> list[str]:
    return [f.name for f in fields(params_type)]


class MemristorModel(ABC):
    """
    One device instance: immutable parameter record plus a single bounded state.

    The memristance and conductance are derived from the state on every access,
    so they can never drift out of sync with it. `advance` takes one explicit
    Euler step using the derivative at the present state and clamps the result
    into `domain`.
    """

    kind: ClassVar[ModelKind]
    params_type: ClassVar[type]

    def __init__(self, params: Any = None, **overrides: Any):
        self.params = self._build_params(params, overrides)
        self._state = np.float64(0.0)
        self._set_state(self._initial_state())

    @classmethod
    def _build_params(cls, params: Any, overrides: Mapping[str, Any]):
        if params is None:
            base = cls.params_type()
        elif is_dataclass(params) and not isinstance(params, type):
            if not isinstance(params, cls.params_type):
                raise TypeError(
                    f"{cls.__name__} expects {cls.params_type.__name__}, got {type(params).__name__}"
                )
            base = params
        else:
            overrides = {**dict(params), **dict(overrides)}
            base = cls.params_type()

        allowed = param_names(cls.params_type)
        unknown = [k for k in overrides if k not in allowed]
        if unknown:
            raise InvalidModelParameters(cls.kind.value, unknown, allowed)
        return replace(base, **overrides) if overrides else base

    @property
    @abstractmethod
    def domain(self) -> Tuple[float, float]:
        ...

    @abstractmethod
    def _initial_state(self) -> float:
        ...

    @property
    @abstractmethod
    def conductance(self) -> float:
        ...

    @property
    def memristance(self) -> float:
        return 1.0 / self.conductance

    @property
    def state(self) -> float:
        return self._state

    def _set_state(self, value: float) -> None:
        lo, hi = self.domain
        # np.clip keeps NaN as NaN instead of snapping it onto a bound
        self._state = np.clip(np.float64(value), lo, hi)

    def current(self, v: float) -> float:
        return v / self.memristance

    @abstractmethod
    def advance(self, v: float, dt: float) -> None:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={float(self._state)!r}, params={self.params!r})"


ModelType = Type[MemristorModel]
