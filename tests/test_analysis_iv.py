"""Tests for I-V trace metrics and plotting."""

import json

import numpy as np
import pandas as pd
import pytest

from memristor_sim import SimulationConfig, run_simulation
from memristor_sim.analysis_iv import (
    compute_iv_metrics,
    hysteresis_area,
    plot_hysteresis,
    save_iv_metrics,
    split_branches,
)
from memristor_sim.features import add_iv_readouts, add_sweep_direction


@pytest.fixture
def resistor_trace():
    t = np.linspace(0, 1e-3, 801)
    v = np.sin(2 * np.pi * 1e3 * t)
    return pd.DataFrame({"time_s": t, "voltage_V": v, "current_A": v / 1000.0})


@pytest.fixture(scope="module")
def biolek_trace():
    cfg = SimulationConfig(model="biolek", duration_s=100e-6, dt_s=1e-8)
    return run_simulation(cfg).to_frame()


class TestFeatures:

    def test_resistance_conductance(self):
        df = pd.DataFrame({"voltage_V": [0.0, 1.0, -2.0], "current_A": [0.0, 0.01, -0.01]})
        out = add_iv_readouts(df)
        assert np.isnan(out["resistance_ohm"].iloc[0])
        assert out["resistance_ohm"].iloc[1] == pytest.approx(100.0)
        assert out["conductance_S"].iloc[2] == pytest.approx(0.005)

    def test_readouts_nan_at_zero_current(self):
        df = pd.DataFrame({"voltage_V": [0.5, 0.0], "current_A": [0.0, 0.01]})
        out = add_iv_readouts(df)
        assert out["resistance_ohm"].isna().all()
        assert out["conductance_S"].isna().all()
        assert list(df.columns) == ["voltage_V", "current_A"]

    def test_sweep_direction(self):
        df = pd.DataFrame({"voltage_V": [0.0, 0.5, 1.0, 1.0, 0.5, -0.5]})
        labels = add_sweep_direction(df)["direction"].tolist()
        assert labels == ["rise", "rise", "rise", "rise", "fall", "fall"]


class TestMetrics:

    def test_ohmic_trace_has_no_loop(self, resistor_trace):
        m = compute_iv_metrics(resistor_trace, vread_V=0.2)
        assert m.hysteresis_area == pytest.approx(0.0, abs=1e-9)
        assert m.ron_Ohm == pytest.approx(1000.0)
        assert m.roff_Ohm == pytest.approx(1000.0)
        assert m.on_off_ratio == pytest.approx(1.0, rel=5e-2)

    def test_memristor_trace_has_loop(self, biolek_trace):
        m = compute_iv_metrics(biolek_trace, vread_V=0.2, run_id="biolek")
        assert m.run_id == "biolek"
        assert m.n_points == len(biolek_trace)
        assert m.hysteresis_area is not None and m.hysteresis_area > 0
        assert m.ion_A >= m.ioff_A
        assert m.roff_Ohm > m.ron_Ohm
        assert m.vmax_V == pytest.approx(1.0, abs=1e-3)

    def test_monotonic_sweep_notes(self):
        v = np.linspace(0, 1, 20)
        m = compute_iv_metrics(pd.DataFrame({"voltage_V": v, "current_A": v / 50}))
        assert m.hysteresis_area is None
        assert m.on_off_ratio is None
        assert "hysteresis area not computed" in m.notes

    def test_empty_trace(self):
        m = compute_iv_metrics(pd.DataFrame({"voltage_V": [], "current_A": []}))
        assert m.n_points == 0
        assert m.notes == "Empty trace."

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="current_A"):
            compute_iv_metrics(pd.DataFrame({"voltage_V": [0.0, 1.0]}))

    def test_split_branches(self, biolek_trace):
        rise, fall = split_branches(biolek_trace)
        assert len(rise) + len(fall) == len(biolek_trace)
        assert "direction" not in rise.columns

    def test_area_needs_both_branches(self, resistor_trace):
        area, grid, _, _ = hysteresis_area(resistor_trace, resistor_trace.iloc[0:0])
        assert area is None and grid is None


class TestOutputs:

    def test_save_metrics(self, resistor_trace, tmp_path):
        m = compute_iv_metrics(resistor_trace, run_id="ohmic")
        csv_path, json_path = save_iv_metrics(m, tmp_path / "processed")
        assert csv_path.exists()
        data = json.loads(json_path.read_text(encoding="utf-8"))
        assert data["run_id"] == "ohmic"
        assert pd.read_csv(csv_path)["n_points"].iloc[0] == 801

    def test_infinite_current_gives_strict_json(self, resistor_trace, tmp_path):
        df = resistor_trace.copy()
        df.loc[100, "current_A"] = np.inf
        m = compute_iv_metrics(df, run_id="overflow")
        assert m.hysteresis_area is None
        assert m.imax_A is None
        assert "not finite" in m.notes

        _, json_path = save_iv_metrics(m, tmp_path)
        text = json_path.read_text(encoding="utf-8")
        assert "NaN" not in text and "Infinity" not in text
        assert json.loads(text)["hysteresis_area"] is None

    def test_plot_written(self, biolek_trace, tmp_path):
        out = plot_hysteresis(biolek_trace, tmp_path / "plots" / "loop.png", title="Biolek")
        assert out.exists()
        assert out.stat().st_size > 0
