from __future__ import annotations

import argparse
import json
import math
from pathlib import Path
import sys
from typing import Any

from .datasets.toy import TOY_DATASET, Point
from .evaluation.metrics import format_metric
from .evaluation.reporting import run_prediction_report
from .models.interfaces import KNNParams, LinearParams, ThresholdParams
from .models.registry import BASE_MODEL_NAMES, build_default_ensemble, registered_models
from .utilities.serialization import json_ready


INVALID_COORDINATES_MESSAGE = "Please enter valid coordinates."


def _execution_root() -> Path:
    return Path.cwd().resolve()


def _is_filesystem_root(path: Path) -> bool:
    return path == path.parent


def _resolve_report_output_file(output_file: Path) -> Path:
    root = _execution_root()
    candidate = output_file.expanduser()
    resolved = (candidate if candidate.is_absolute() else root / candidate).resolve()
    if resolved.parent == root or _is_filesystem_root(resolved.parent):
        # Never write report files directly at execution root or filesystem root.
        return (root / "runs" / "report" / "predictions" / resolved.name).resolve()
    return resolved


def sanitize_k(k: int, n_points: int) -> tuple[int, list[str]]:
    if k < 1:
        raise ValueError(f"Invalid k={k}; must be >=1")
    warnings: list[str] = []
    if k > n_points:
        warnings.append(f"Clipped k={k} to {n_points} because the dataset has {n_points} points")
        k = n_points
    return k, warnings


def parse_query_point(x: float, y: float) -> Point:
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(INVALID_COORDINATES_MESSAGE)
    return Point(x=x, y=y)


def _params_from_args(args: argparse.Namespace) -> tuple[ThresholdParams, LinearParams, KNNParams, list[str]]:
    k, warnings = sanitize_k(args.k, len(TOY_DATASET))
    threshold_params = ThresholdParams(split_x=args.split_x)
    linear_params = LinearParams(weights=(args.weights[0], args.weights[1]), bias=args.bias)
    knn_params = KNNParams(k=k)
    return threshold_params, linear_params, knn_params, warnings


def _cmd_predict(args: argparse.Namespace) -> int:
    try:
        point = parse_query_point(args.x, args.y)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    threshold_params, linear_params, knn_params, warnings = _params_from_args(args)
    members, meta = build_default_ensemble(
        threshold_params=threshold_params,
        linear_params=linear_params,
        knn_params=knn_params,
    )

    base = {name: int(members[name].predict(point)) for name in BASE_MODEL_NAMES}
    final = int(meta.predict(point))
    neighbors = members["knn"].neighbors(point)

    if args.json:
        payload: dict[str, Any] = {
            "point": point,
            "base_predictions": base,
            "final": final,
            "knn_neighbors": [
                {"index": i, "x": TOY_DATASET[i].x, "y": TOY_DATASET[i].y, "label": TOY_DATASET[i].label}
                for i in neighbors
            ],
            "linear_score": members["linear"].score(point),
            "warnings": warnings,
        }
        print(json.dumps(json_ready(payload), indent=2))
        return 0

    for warning in warnings:
        print(f"Warning: {warning}")
    joined = ", ".join(f"{name}={pred}" for name, pred in base.items())
    print(f"Base predictions: {joined} -> Final: {final}")
    print(
        "KNN neighbors: "
        + ", ".join(f"#{i} ({TOY_DATASET[i].x:g}, {TOY_DATASET[i].y:g}) label={TOY_DATASET[i].label}" for i in neighbors)
    )
    return 0


def _cmd_report_predictions(args: argparse.Namespace) -> int:
    threshold_params, linear_params, knn_params, warnings = _params_from_args(args)
    output_file = _resolve_report_output_file(args.output_file)
    csv_file = _resolve_report_output_file(args.csv_file) if args.csv_file is not None else None

    out, report = run_prediction_report(
        output_file=output_file,
        threshold_params=threshold_params,
        linear_params=linear_params,
        knn_params=knn_params,
        csv_file=csv_file,
        warnings=warnings,
    )

    for warning in warnings:
        print(f"Warning: {warning}")
    print(f"Points: {report['data_info']['n_points']}")
    for name, summary in report["summaries"].items():
        print(f"  {name:<10} accuracy={format_metric(summary['accuracy'])}")
    print(f"Saved: {out}")
    if csv_file is not None:
        print(f"Prediction table: {csv_file}")
    return 0


def _cmd_models_list(args: argparse.Namespace) -> int:
    for name in registered_models():
        print(name)
    return 0


def _add_model_params(parser: argparse.ArgumentParser) -> None:
    threshold_defaults = ThresholdParams()
    linear_defaults = LinearParams()
    knn_defaults = KNNParams()
    parser.add_argument("--split-x", type=float, default=threshold_defaults.split_x, help="Threshold split on x")
    parser.add_argument(
        "--weights",
        nargs=2,
        type=float,
        default=list(linear_defaults.weights),
        metavar=("W0", "W1"),
        help="Linear separator weights",
    )
    parser.add_argument("--bias", type=float, default=linear_defaults.bias, help="Linear separator bias")
    parser.add_argument("--k", type=int, default=knn_defaults.k, help="Number of KNN neighbors")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="metavote toy classifiers and majority-vote meta-learner")
    sub = parser.add_subparsers(dest="command_group", required=True)

    predict = sub.add_parser("predict", help="Predict a single query point")
    predict.add_argument("--x", type=float, required=True, help="Query x coordinate")
    predict.add_argument("--y", type=float, required=True, help="Query y coordinate")
    predict.add_argument("--json", action="store_true", help="Print a JSON object instead of text")
    _add_model_params(predict)
    predict.set_defaults(func=_cmd_predict)

    report_parser = sub.add_parser("report", help="Reporting commands")
    report_sub = report_parser.add_subparsers(dest="report_command", required=True)

    predictions = report_sub.add_parser("predictions", help="Predict every dataset point and summarize accuracy")
    predictions.add_argument(
        "--output-file",
        type=Path,
        default=Path("runs/report/predictions/prediction_report.json"),
        help="Output JSON path",
    )
    predictions.add_argument("--csv-file", type=Path, default=None, help="Optional CSV prediction table")
    _add_model_params(predictions)
    predictions.set_defaults(func=_cmd_report_predictions)

    models_parser = sub.add_parser("models", help="Model registry commands")
    models_sub = models_parser.add_subparsers(dest="models_command", required=True)
    list_parser = models_sub.add_parser("list", help="List registered model names")
    list_parser.set_defaults(func=_cmd_models_list)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
