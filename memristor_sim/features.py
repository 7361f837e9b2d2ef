from __future__ import annotations
import numpy as np
import pandas as pd

EPS = 1e-12

def add_iv_readouts(df: pd.DataFrame) -> pd.DataFrame:
    """
    Apparent conductance i/v and resistance v/i of a trace, one value per sample.
    Both are NaN where the voltage or the current is within EPS of zero.
    """
    v = df["voltage_V"].to_numpy(dtype=float)
    i = df["current_A"].to_numpy(dtype=float)

    g = np.full(v.shape, np.nan)
    np.divide(i, v, out=g, where=(np.abs(v) > EPS) & (np.abs(i) > EPS))

    return df.assign(resistance_ohm=1.0 / g, conductance_S=g)

def add_sweep_direction(df: pd.DataFrame, v_col: str = "voltage_V") -> pd.DataFrame:
    """
    Label each sample 'rise' or 'fall' by the sign of the voltage change into it.
    Flat steps inherit the previous label; the first sample takes the label of the second.
    """
    v = df[v_col].astype(float).to_numpy()
    s = np.sign(np.diff(v))

    labels = np.empty(v.size, dtype=object)
    last = None
    for k, sk in enumerate(s, start=1):
        if sk > 0:
            last = "rise"
        elif sk < 0:
            last = "fall"
        labels[k] = last
    if v.size:
        labels[0] = labels[1] if v.size > 1 else None

    out = df.copy()
    out["direction"] = labels
    return out
