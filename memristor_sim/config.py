from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CFG_PATH = Path(__file__).resolve().parent / "config.yaml"

US = 1e-6


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_default_config() -> dict:
    return yaml.safe_load(DEFAULT_CFG_PATH.read_text(encoding="utf-8"))


def load_config(path: str | Path | None = None) -> dict:
    """Read a YAML config, filling anything it leaves out from the packaged defaults."""
    defaults = load_default_config()
    if path is None:
        return defaults
    with open(path, "r", encoding="utf-8") as f:
        user = yaml.safe_load(f) or {}
    if not isinstance(user, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(user).__name__}")
    return _merge(defaults, user)


@dataclass
class SimulationConfig:
    model: str = "biolek"
    model_params: Dict[str, Any] = field(default_factory=dict)
    waveform: str = "sine"
    frequency_Hz: float = 10e3
    amplitude_V: float = 1.0
    duration_s: float = 200 * US
    dt_s: float = 0.01 * US
    vread_V: float = 0.2
    strict: bool = False
    raw_dir: Path = Path("data/raw")
    processed_dir: Path = Path("data/processed")
    plots_dir: Path = Path("data/plots")

    @classmethod
    def from_dict(cls, cfg: dict, model: Optional[str] = None) -> "SimulationConfig":
        cfg = _merge(load_default_config(), cfg or {})

        model_name = str(model or cfg.get("model") or "biolek").strip().lower()
        models = cfg.get("models") or {}
        # YAML 1.1 reads 2e-4 (no dot) as a string
        params = {
            name: value if value is None or isinstance(value, bool) else float(value)
            for name, value in (models.get(model_name) or {}).items()
        }

        wf = cfg.get("waveform") or {}
        tm = cfg.get("time") or {}
        paths = cfg.get("paths") or {}

        return cls(
            model=model_name,
            model_params=params,
            waveform=str(wf.get("family", "sine")),
            frequency_Hz=float(wf.get("frequency_Hz", 10e3)),
            amplitude_V=float(wf.get("amplitude_V", 1.0)),
            # microseconds -> seconds
            duration_s=float(tm.get("duration_us", 200.0)) * US,
            dt_s=float(tm.get("dt_us", 0.01)) * US,
            vread_V=float(cfg.get("vread_V", 0.2)),
            strict=bool(cfg.get("strict", False)),
            raw_dir=Path(paths.get("data_raw_dir", "data/raw")),
            processed_dir=Path(paths.get("data_processed_dir", "data/processed")),
            plots_dir=Path(paths.get("plots_dir", "data/plots")),
        )
