from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from memristor_sim.analysis_iv import compute_iv_metrics, plot_hysteresis, save_iv_metrics
from memristor_sim.config import SimulationConfig, load_config
from memristor_sim.model_registry import list_models
from memristor_sim.models.base import ModelKind
from memristor_sim.simulate import run_simulation
from memristor_sim.waveforms import WAVEFORMS


def _parse_set(items: List[str]) -> dict:
    out = {}
    for item in items or []:
        if "=" not in item:
            raise ValueError(f"--set expects NAME=VALUE, got {item!r}")
        name, raw = item.split("=", 1)
        try:
            value = float(raw)
        except ValueError:
            # null, true/false and friends
            value = yaml.safe_load(raw)
        out[name.strip()] = value
    return out


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="memristor-sim",
        description="Simulate a memristor model under a periodic drive and plot its I–V loop.",
    )
    ap.add_argument("--config", default=None, help="YAML config (default: packaged config.yaml)")
    ap.add_argument("--model", choices=[k.value for k in ModelKind], default=None)
    ap.add_argument("--waveform", choices=sorted(WAVEFORMS), default=None)
    ap.add_argument("--frequency", type=float, default=None, help="Drive frequency (Hz)")
    ap.add_argument("--amplitude", type=float, default=None, help="Drive amplitude (V)")
    ap.add_argument("--duration-us", type=float, default=None)
    ap.add_argument("--dt-us", type=float, default=None)
    ap.add_argument("--set", action="append", default=[], metavar="NAME=VALUE",
                    help="Override a model parameter, e.g. --set R_OFF=20e3")
    ap.add_argument("--strict", action="store_true", help="Fail on NaN/Inf instead of propagating")
    ap.add_argument("--out-dir", default=None, help="Directory for the trace CSV")
    ap.add_argument("--plots-dir", default=None)
    ap.add_argument("--no-plot", action="store_true")
    ap.add_argument("--show", action="store_true")
    ap.add_argument("--list-models", action="store_true")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def make_config(args: argparse.Namespace) -> SimulationConfig:
    cfg = load_config(args.config)

    wf = cfg.setdefault("waveform", {})
    tm = cfg.setdefault("time", {})
    if args.waveform is not None:
        wf["family"] = args.waveform
    if args.frequency is not None:
        wf["frequency_Hz"] = args.frequency
    if args.amplitude is not None:
        wf["amplitude_V"] = args.amplitude
    if args.duration_us is not None:
        tm["duration_us"] = args.duration_us
    if args.dt_us is not None:
        tm["dt_us"] = args.dt_us
    if args.strict:
        cfg["strict"] = True

    sim_cfg = SimulationConfig.from_dict(cfg, model=args.model)
    sim_cfg.model_params.update(_parse_set(args.set))
    if args.out_dir:
        sim_cfg.raw_dir = Path(args.out_dir)
    if args.plots_dir:
        sim_cfg.plots_dir = Path(args.plots_dir)
    return sim_cfg


def plot_title(cfg: SimulationConfig, area: Optional[float] = None) -> str:
    title = f"I–V Hysteresis: {cfg.model}, {cfg.waveform}"
    if area is not None:
        title += f" (Area={area:.3e})"
    return title


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.list_models:
        for spec in list_models():
            print(f"{spec.kind.value:10s} {spec.description}")
            print(f"{'':10s} params: {', '.join(spec.parameters)}")
        return 0

    cfg = make_config(args)
    run_id = f"sim_{cfg.model}_{cfg.waveform}"

    print(f"Running I–V simulation: model={cfg.model}, waveform={cfg.waveform}, "
          f"f={cfg.frequency_Hz:g} Hz, A={cfg.amplitude_V:g} V")

    result = run_simulation(cfg)
    df = result.to_frame()

    cfg.raw_dir.mkdir(parents=True, exist_ok=True)
    csv_path = cfg.raw_dir / f"{run_id}.csv"
    df.to_csv(csv_path, index=False)
    print("CSV saved:", csv_path)

    metrics = compute_iv_metrics(df, vread_V=cfg.vread_V, run_id=run_id)
    m_csv, _ = save_iv_metrics(metrics, cfg.processed_dir)
    print("Metrics saved:", m_csv)

    if not args.no_plot:
        title = plot_title(cfg, metrics.hysteresis_area)
        plot_path = plot_hysteresis(df, cfg.plots_dir / f"hysteresis_{run_id}.png", title=title, show=args.show)
        print("Plot saved:", plot_path)

    print(result.status)
    return 0


if __name__ == "__main__":
    sys.exit(main())
