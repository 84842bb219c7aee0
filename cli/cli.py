"""Headless Fourier analysis utilities."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from fftlab.core.config import AppConfig, load_config
from fftlab.core.errors import FourierError
from fftlab.core.logger import LoggerConfig, configure_logging, get_logger
from fftlab.core.utils import install_excepthook
from fftlab.dsp.spectrum import spectral_peaks
from fftlab.services.analysis import AnalysisResult, request_from_config, run_analysis

LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 2


def _add_scene_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=None, help="Path to a YAML configuration file")
    parser.add_argument(
        "--wave",
        nargs=4,
        type=float,
        action="append",
        metavar=("FREQ", "AMP", "DECAY", "PHASE"),
        help="Replace the configured waves; repeat for each wave",
    )
    parser.add_argument("--num-points", type=int, default=None, help="Samples per signal (power of two)")
    parser.add_argument("--sampling-rate", type=float, default=None, help="Sample rate in Hz")
    parser.add_argument("--selected-frequency", type=float, default=None, help="Projection frequency in Hz")
    parser.add_argument("--range", type=float, nargs=2, default=None, metavar=("LOW", "HIGH"), help="Display range in Hz")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fftlab", description="Damped sinusoid Fourier analysis")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Summarise peaks and the projected centroid")
    _add_scene_arguments(analyze)
    analyze.add_argument("--peaks", type=int, default=5, help="Number of amplitude peaks to report")

    spectrum = sub.add_parser("spectrum", help="Print the amplitude and phase spectra")
    _add_scene_arguments(spectrum)

    return parser


def _overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    engine: Dict[str, Any] = {}
    display: Dict[str, Any] = {}
    if args.num_points is not None:
        engine["num_points"] = args.num_points
    if args.sampling_rate is not None:
        engine["sampling_rate"] = args.sampling_rate
    if args.selected_frequency is not None:
        display["selected_frequency"] = args.selected_frequency
    if args.range is not None:
        display["frequency_range"] = tuple(args.range)
    if engine:
        overrides["engine"] = engine
    if display:
        overrides["display"] = display
    if args.wave:
        overrides["waves"] = [
            {"frequency": f, "amplitude": a, "decay": d, "phase_degrees": p} for f, a, d, p in args.wave
        ]
    if args.debug:
        overrides["debug"] = True
        overrides.setdefault("logging", {})["level"] = "DEBUG"
    return overrides


def _setup(args: argparse.Namespace) -> AppConfig:
    config = load_config(args.config, _overrides_from_args(args))
    configure_logging(
        LoggerConfig(
            level=config.logging.level,
            directory=config.logging.directory,
            rotate_bytes=config.logging.rotate_bytes,
            backup_count=config.logging.backup_count,
        ),
        enable_console=True,
    )
    if config.debug:
        install_excepthook()
    return config


def print_summary(result: AnalysisResult, config: AppConfig, peaks: int) -> None:
    low, high = config.display.frequency_range
    request = result.request
    centroid = result.centroid
    print(f"Selected frequency: {request.selected_frequency} Hz")
    print(f"Centroid: X={centroid.real:.2f}, Y={centroid.imag:.2f} (|c|={abs(centroid):.4f})")
    print(f"Peaks in {low:g}-{high:g} Hz:")
    print(f"  {'frequency_hz':>12}  {'amplitude':>10}  {'phase_deg':>10}")
    for point in spectral_peaks(result.amplitude.within(low, high), count=peaks):
        phase = result.phase.nearest(point.frequency_hz)
        print(f"  {point.frequency_hz:12.3f}  {point.value:10.4f}  {phase.value:10.2f}")


def print_spectrum(result: AnalysisResult, config: AppConfig) -> None:
    low, high = config.display.frequency_range
    amplitude = result.amplitude.within(low, high)
    phase = result.phase.within(low, high)
    print(f"{'frequency_hz':>12}  {'amplitude':>10}  {'phase_deg':>10}")
    for amp, ph in zip(amplitude.points(), phase.points()):
        print(f"{amp.frequency_hz:12.3f}  {amp.value:10.4f}  {ph.value:10.2f}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _setup(args)
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}")
        return EXIT_INVALID

    try:
        result = run_analysis(request_from_config(config))
    except FourierError as exc:
        LOGGER.error("Analysis failed: %s", exc)
        return EXIT_INVALID

    if args.command == "analyze":
        print_summary(result, config, args.peaks)
    elif args.command == "spectrum":
        print_spectrum(result, config)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(main())
