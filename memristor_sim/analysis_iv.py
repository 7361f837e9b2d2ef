from __future__ import annotations
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Tuple
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from memristor_sim.features import EPS, add_iv_readouts, add_sweep_direction

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("voltage_V", "current_A")


@dataclass
class IVMetrics:
    run_id: str
    n_points: int
    vmax_V: Optional[float]
    imax_A: Optional[float]
    vread_V: float
    ion_A: Optional[float]
    ioff_A: Optional[float]
    on_off_ratio: Optional[float]
    ron_Ohm: Optional[float]
    roff_Ohm: Optional[float]
    hysteresis_area: Optional[float]
    notes: str


def _require_iv_columns(df: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Trace must contain columns voltage_V and current_A. Missing: {missing}")
    out = df.dropna(subset=list(REQUIRED_COLUMNS)).copy()
    out["voltage_V"] = out["voltage_V"].astype(float)
    out["current_A"] = out["current_A"].astype(float)
    return out


def _interp_current_vs_v(branch: pd.DataFrame, v_grid: np.ndarray) -> np.ndarray:
    if branch.empty:
        return np.full_like(v_grid, np.nan, dtype=float)
    v = branch["voltage_V"].to_numpy(dtype=float)
    i = branch["current_A"].to_numpy(dtype=float)
    order = np.argsort(v, kind="stable")
    v_s = v[order]
    i_s = i[order]
    v_u, idx = np.unique(v_s, return_index=True)
    i_u = i_s[idx]
    if v_u.size < 2:
        return np.full_like(v_grid, np.nan, dtype=float)
    return np.interp(v_grid, v_u, i_u)


def split_branches(df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Rising-voltage and falling-voltage samples of a trace."""
    labeled = add_sweep_direction(df)
    rise = labeled[labeled["direction"] == "rise"]
    fall = labeled[labeled["direction"] == "fall"]
    return rise.drop(columns="direction"), fall.drop(columns="direction")


def hysteresis_area(
    b1: pd.DataFrame,
    b2: pd.DataFrame,
    n_grid: int = 400,
) -> tuple[Optional[float], Optional[np.ndarray], Optional[np.ndarray], Optional[np.ndarray]]:
    if b1.empty or b2.empty:
        return None, None, None, None

    v1 = b1["voltage_V"].to_numpy(dtype=float)
    v2 = b2["voltage_V"].to_numpy(dtype=float)

    vmin = max(np.nanmin(v1), np.nanmin(v2))
    vmax = min(np.nanmax(v1), np.nanmax(v2))
    if not np.isfinite(vmin) or not np.isfinite(vmax) or vmax <= vmin:
        return None, None, None, None

    v_grid = np.linspace(vmin, vmax, int(n_grid))
    i1g = _interp_current_vs_v(b1, v_grid)
    i2g = _interp_current_vs_v(b2, v_grid)

    area = float(np.trapezoid(np.abs(i1g - i2g), v_grid))
    return area, v_grid, i1g, i2g


def _closest_at_v(df: pd.DataFrame, v_target: float) -> Optional[pd.Series]:
    if df.empty:
        return None
    idx = (df["voltage_V"] - v_target).abs().idxmin()
    return df.loc[idx]


def _finite_or_none(x) -> Optional[float]:
    x = float(x)
    return x if np.isfinite(x) else None


def compute_iv_metrics(
    df: pd.DataFrame,
    vread_V: float = 0.2,
    run_id: str = "sim",
) -> IVMetrics:
    df = _require_iv_columns(df)
    notes = ""

    if df.empty:
        return IVMetrics(
            run_id=run_id, n_points=0, vmax_V=None, imax_A=None, vread_V=float(vread_V),
            ion_A=None, ioff_A=None, on_off_ratio=None, ron_Ohm=None, roff_Ohm=None,
            hysteresis_area=None, notes="Empty trace.",
        )

    vmax = _finite_or_none(df["voltage_V"].abs().max())
    imax = _finite_or_none(df["current_A"].abs().max())

    # ON/OFF at Vread: the two branches give different currents at the same voltage
    rise, fall = split_branches(df)
    ion_A = None
    ioff_A = None
    on_off_ratio = None
    row_r = _closest_at_v(rise, +abs(vread_V))
    row_f = _closest_at_v(fall, +abs(vread_V))
    if row_r is not None and row_f is not None:
        candidates = [abs(float(row_r["current_A"])), abs(float(row_f["current_A"]))]
        ion_A = max(candidates)
        ioff_A = min(candidates)
        on_off_ratio = (ion_A / ioff_A) if ioff_A > 0 else None
    else:
        notes += "Vread not reached on both branches; ON/OFF not computed. "

    rc = add_iv_readouts(df)
    mask = np.abs(rc["voltage_V"].to_numpy(dtype=float)) >= max(abs(vread_V) / 2, EPS)
    r = np.abs(rc["resistance_ohm"].to_numpy(dtype=float))[mask]
    r = r[np.isfinite(r)]
    ron = float(r.min()) if r.size else None
    roff = float(r.max()) if r.size else None
    if ron is None:
        notes += "No samples above Vread/2; R_on/R_off not computed. "

    area, _, _, _ = hysteresis_area(rise, fall)
    if area is None:
        notes += "Rising or falling branch missing; hysteresis area not computed. "
    else:
        area = _finite_or_none(area)
        if area is None:
            notes += "Hysteresis area not finite; trace contains Inf. "

    return IVMetrics(
        run_id=run_id,
        n_points=int(len(df)),
        vmax_V=vmax,
        imax_A=imax,
        vread_V=float(vread_V),
        ion_A=ion_A,
        ioff_A=ioff_A,
        on_off_ratio=on_off_ratio,
        ron_Ohm=ron,
        roff_Ohm=roff,
        hysteresis_area=area,
        notes=notes.strip(),
    )


def save_iv_metrics(metrics: IVMetrics, out_dir: str | Path) -> Tuple[Path, Path]:
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    out_csv = out_path / f"iv_metrics_{metrics.run_id}.csv"
    pd.DataFrame([asdict(metrics)]).to_csv(out_csv, index=False)

    out_json = out_path / f"iv_metrics_{metrics.run_id}.json"
    out_json.write_text(json.dumps(asdict(metrics), indent=2), encoding="utf-8")
    logger.debug("Metrics written to %s and %s", out_csv, out_json)
    return out_csv, out_json


def plot_hysteresis(
    df: pd.DataFrame,
    out_path: str | Path,
    title: str | None = None,
    show: bool = False,
) -> Path:
    df = _require_iv_columns(df)

    plt.figure(figsize=(7, 4.5))
    plt.plot(df["voltage_V"], df["current_A"], linewidth=2)
    plt.axhline(0.0, color="0.6", linewidth=0.8)
    plt.axvline(0.0, color="0.6", linewidth=0.8)
    plt.xlabel("Voltage (V)")
    plt.ylabel("Current (A)")
    plt.title(title or "I–V Hysteresis")
    plt.grid(True)

    out_p = Path(out_path)
    out_p.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_p, dpi=220)
    if show:
        plt.show()
    plt.close()
    return out_p
