"""Memristor device-model engine: waveforms, six device models and a fixed-step driver."""

from .errors import InvalidModelKind, InvalidModelParameters, MemristorSimError, NumericInstability
from .model_registry import ModelSpec, create_model, get_model, list_models, register_model

# Importing the model modules populates the registry
from .models import linear, mms, vteam, yakopcic  # noqa: F401
from .models.base import MemristorModel, ModelKind
from .models.linear import (
    BiolekMemristor,
    BiolekParams,
    JoglekarMemristor,
    JoglekarParams,
    LinearIonDriftMemristor,
    LinearIonDriftParams,
)
from .models.mms import MMSMemristor, MMSParams
from .models.vteam import VTEAMMemristor, VTEAMParams
from .models.yakopcic import YakopcicMemristor, YakopcicParams
from .waveforms import generate_waveform
from .config import SimulationConfig, load_config
from .simulate import SimulationResult, run_simulation, simulate, simulate_states, time_vector

__version__ = "0.1.0"

__all__ = [
    "MemristorSimError",
    "InvalidModelKind",
    "InvalidModelParameters",
    "NumericInstability",
    "ModelSpec",
    "create_model",
    "get_model",
    "list_models",
    "register_model",
    "MemristorModel",
    "ModelKind",
    "LinearIonDriftMemristor",
    "LinearIonDriftParams",
    "BiolekMemristor",
    "BiolekParams",
    "JoglekarMemristor",
    "JoglekarParams",
    "VTEAMMemristor",
    "VTEAMParams",
    "MMSMemristor",
    "MMSParams",
    "YakopcicMemristor",
    "YakopcicParams",
    "generate_waveform",
    "SimulationConfig",
    "load_config",
    "SimulationResult",
    "run_simulation",
    "simulate",
    "simulate_states",
    "time_vector",
]
