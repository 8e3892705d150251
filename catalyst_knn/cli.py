# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Command-line interface to the predictor and the mass-activity
#   lookup.
#
# COMMANDS:
# ---------
# 1. Predict E_half for a candidate catalyst:
#    python -m catalyst_knn.cli predict --metal Co --mof ZIF-67 \
#        --atmosphere "Ar/H2" --pyro-temp 900 -k 5
#
# 2. Show reference statistics:
#    python -m catalyst_knn.cli stats --data data/data1.csv
#
# 3. Mass-activity lookup:
#    python -m catalyst_knn.cli lookup --mass-activity 0.35 --metal Fe
#    python -m catalyst_knn.cli lookup --mass-activity 0.9 --pt
#
# EXIT STATUS:
# ------------
#   0 on success, 1 on any failure (load error, not ready, no match).
#
# ==============================================

import argparse
import json
import logging
import sys
from typing import List, Optional

from catalyst_knn.config import AppConfig, get_config
from catalyst_knn.errors import InitializationError
from catalyst_knn.lookup.half_wave_lookup import HalfWaveLookup
from catalyst_knn.predictor import KNNPredictor
from catalyst_knn.storage.csv_source import CsvSource


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalyst-knn",
        description="Estimate catalyst half-wave potential from similar reference catalysts."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    predict = subparsers.add_parser("predict", help="Predict E_half for a candidate catalyst")
    predict.add_argument("--metal", required=True, help='Active metal(s), e.g. "Co,Fe"')
    predict.add_argument("--mof", required=True, help='MOF / structural family, e.g. "ZIF-8"')
    predict.add_argument("--form", help='Structural form, e.g. "SA" or "Cluster"')
    predict.add_argument("--ligand", help='Ligand, e.g. "2-methylimidazole"')
    predict.add_argument("--atmosphere", help='Pyrolysis atmosphere, e.g. "Ar/H2"')
    predict.add_argument("--pyro-temp", type=float, help="Pyrolysis temperature (C)")
    predict.add_argument("--bet", type=float, help="BET surface area (m2/g)")
    predict.add_argument("--rpm", type=float, help="Rotation speed (rpm)")
    predict.add_argument("--scan-rate", type=float, help="Scan rate (mV/s)")
    predict.add_argument("-k", type=positive_int, default=None, help="Neighbors to report")
    predict.add_argument("--data", help="Reference CSV path or URL")
    predict.add_argument("--json", action="store_true", help="Print JSON")

    stats = subparsers.add_parser("stats", help="Show reference dataset statistics")
    stats.add_argument("--data", help="Reference CSV path or URL")

    lookup = subparsers.add_parser("lookup", help="Mass activity → half-wave lookup")
    lookup.add_argument("--mass-activity", type=float, required=True, help="Mass activity (A/mg)")
    group = lookup.add_mutually_exclusive_group(required=True)
    group.add_argument("--pt", action="store_true", help="Platinum-based catalyst")
    group.add_argument("--metal", choices=["Co", "Fe"], help="Metal of a non-Pt catalyst")
    lookup.add_argument("--mass-data", help="mass_activity CSV path or URL")
    lookup.add_argument("--half-wave-data", help="half_wave CSV path or URL")
    lookup.add_argument("--json", action="store_true", help="Print JSON")

    return parser


def _make_predictor(config: AppConfig, data: Optional[str]) -> KNNPredictor:
    source = CsvSource(
        data or config.dataset.reference_source,
        timeout=config.dataset.request_timeout_seconds
    )
    return KNNPredictor(config=config, source=source)


def run_predict(args: argparse.Namespace, config: AppConfig) -> int:
    predictor = _make_predictor(config, args.data)
    failure = predictor.initialize()
    if failure is not None:
        print(f"✗ {failure.message}")
        return 1

    query = {
        "metal": args.metal,
        "mof": args.mof,
        "form": args.form,
        "ligand": args.ligand,
        "atmosphere": args.atmosphere,
        "pyro_temp": args.pyro_temp,
        "bet": args.bet,
        "rpm": args.rpm,
        "scan_rate": args.scan_rate,
    }
    result = predictor.predict(query, k=args.k)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.ok else 1

    if not result.ok:
        print(f"✗ {result.message}")
        return 1

    print("=" * 60)
    print(f"Predicted E_half: {result.predicted_value:.4f} V vs RHE")
    print("=" * 60)
    print(f"{'Rank':>4}  {'Index':>5}  {'E_half':>8}  {'Distance':>8}  {'Similarity':>10}")
    for rank, neighbor in enumerate(result.neighbors, start=1):
        print(f"{rank:>4}  {neighbor.index:>5}  {neighbor.target_value:>8.4f}  "
              f"{neighbor.distance:>8.3f}  {neighbor.display_similarity:>10.3f}")
    return 0


def run_stats(args: argparse.Namespace, config: AppConfig) -> int:
    predictor = _make_predictor(config, args.data)
    predictor.initialize()
    status = predictor.get_status()

    print(f"Source: {status['source']}")
    print(f"State: {status['state']}")
    print(f"Reference records: {status['reference_records']} "
          f"(discarded: {status['discarded_rows']})")
    for name, stats in status["statistics"].items():
        print(f"   - {name}: mean={stats['mean']:.3f} std={stats['std']:.3f} n={stats['count']}")
    return 0 if predictor.is_ready else 1


def run_lookup(args: argparse.Namespace, config: AppConfig) -> int:
    timeout = config.dataset.request_timeout_seconds
    mass_rows = CsvSource(args.mass_data or config.dataset.mass_activity_source, timeout).load()
    half_wave_rows = CsvSource(args.half_wave_data or config.dataset.half_wave_source, timeout).load()

    lookup = HalfWaveLookup(mass_rows, half_wave_rows)
    result = lookup.predict_half_wave(args.pt, args.mass_activity, args.metal)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        print(f"✓ Half-wave potential: {result.half_wave_potential:.3f} V")
        print(f"   Source: {result.source_pdf}")
        print(f"   Closest mass activity: {result.closest_mass_activity} A/mg "
              f"(diff {result.difference:.6f})")
    else:
        print(f"✗ {result.error}")
    return 0 if result.success else 1


COMMANDS = {
    "predict": run_predict,
    "stats": run_stats,
    "lookup": run_lookup,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        return COMMANDS[args.command](args, config)
    except InitializationError as e:
        print(f"✗ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
