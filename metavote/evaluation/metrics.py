from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix

from ..datasets.toy import LabeledPoint, dataset_arrays
from ..models.interfaces import Classifier, PointLike


def format_metric(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.4f}"


def predict_batch(model: Classifier, points: Sequence[PointLike]) -> np.ndarray:
    return np.asarray([model.predict(p) for p in points], dtype=np.int32)


def compute_accuracy(labels_true: np.ndarray, labels_pred: np.ndarray) -> float | None:
    if labels_true.size == 0:
        return None
    return float(accuracy_score(labels_true, labels_pred))


def compute_model_summary(labels_true: np.ndarray, labels_pred: np.ndarray) -> dict[str, Any]:
    cm = confusion_matrix(labels_true, labels_pred, labels=[0, 1])
    return {
        "accuracy": compute_accuracy(labels_true, labels_pred),
        "n_predicted_0": int(np.sum(labels_pred == 0)),
        "n_predicted_1": int(np.sum(labels_pred == 1)),
        "confusion_matrix": cm.astype(int).tolist(),
    }


def build_prediction_table(
    members: Mapping[str, Classifier],
    meta: Classifier,
    points: Sequence[LabeledPoint],
) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for i, point in enumerate(points, start=1):
        row: dict[str, Any] = {
            "index": i,
            "x": float(point.x),
            "y": float(point.y),
            "label": int(point.label),
        }
        for name, model in members.items():
            row[name] = int(model.predict(point))
        row["meta"] = int(meta.predict(point))
        rows.append(row)
    return rows


def compute_model_summaries(
    rows: list[dict[str, Any]],
    model_names: Sequence[str],
) -> dict[str, dict[str, Any]]:
    labels_true = np.asarray([row["label"] for row in rows], dtype=np.int32)
    summaries: dict[str, dict[str, Any]] = {}
    for name in model_names:
        labels_pred = np.asarray([row[name] for row in rows], dtype=np.int32)
        summaries[name] = compute_model_summary(labels_true, labels_pred)
    return summaries


def evaluate_on_dataset(model: Classifier, points: Sequence[LabeledPoint]) -> dict[str, Any]:
    _, labels_true = dataset_arrays(points)
    return compute_model_summary(labels_true, predict_batch(model, points))
