from __future__ import annotations

import csv
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any

from ..datasets.toy import TOY_DATASET, label_counts
from ..models.interfaces import KNNParams, LinearParams, ThresholdParams
from ..models.registry import BASE_MODEL_NAMES, build_default_ensemble
from ..utilities.serialization import json_ready
from .metrics import build_prediction_table, compute_model_summaries


TABLE_COLUMNS = ["index", "x", "y", "label", *BASE_MODEL_NAMES, "meta"]


def save_prediction_table(output_path: Path, rows: list[dict[str, Any]]) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=TABLE_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow({key: row[key] for key in TABLE_COLUMNS})


def build_prediction_report(
    *,
    threshold_params: ThresholdParams,
    linear_params: LinearParams,
    knn_params: KNNParams,
    warnings: list[str] | None = None,
) -> dict[str, Any]:
    members, meta = build_default_ensemble(
        threshold_params=threshold_params,
        linear_params=linear_params,
        knn_params=knn_params,
    )
    rows = build_prediction_table(members, meta, TOY_DATASET)
    return {
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "model_params": {
            "threshold": threshold_params,
            "linear": linear_params,
            "knn": knn_params,
        },
        "data_info": {
            "n_points": len(TOY_DATASET),
            "label_counts": label_counts(TOY_DATASET),
        },
        "summaries": compute_model_summaries(rows, [*BASE_MODEL_NAMES, "meta"]),
        "rows": rows,
        "warnings": list(warnings or []),
    }


def run_prediction_report(
    *,
    output_file: Path,
    threshold_params: ThresholdParams,
    linear_params: LinearParams,
    knn_params: KNNParams,
    csv_file: Path | None = None,
    warnings: list[str] | None = None,
) -> tuple[Path, dict[str, Any]]:
    report = build_prediction_report(
        threshold_params=threshold_params,
        linear_params=linear_params,
        knn_params=knn_params,
        warnings=warnings,
    )

    if csv_file is not None:
        save_prediction_table(csv_file, report["rows"])
        report["artifacts"] = {"prediction_table": str(csv_file)}

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(json_ready(report), f, indent=2)

    return output_file, report
