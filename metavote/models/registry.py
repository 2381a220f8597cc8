from __future__ import annotations

from typing import Callable

from .interfaces import Classifier, KNNParams, LinearParams, ThresholdParams
from .knn import KNNClassifier
from .linear import LinearClassifier
from .meta import MetaLearner
from .threshold import ThresholdClassifier


_REGISTRY: dict[str, Callable[[], Classifier]] = {}

BASE_MODEL_NAMES: tuple[str, ...] = ("threshold", "linear", "knn")


def register(name: str, factory: Callable[[], Classifier]) -> None:
    _REGISTRY[name] = factory


def create(name: str) -> Classifier:
    if name not in _REGISTRY:
        raise ValueError(f"Unknown model '{name}'. Registered: {sorted(_REGISTRY.keys())}")
    return _REGISTRY[name]()


def registered_models() -> list[str]:
    return sorted(_REGISTRY.keys())


def build_default_ensemble(
    *,
    threshold_params: ThresholdParams | None = None,
    linear_params: LinearParams | None = None,
    knn_params: KNNParams | None = None,
) -> tuple[dict[str, Classifier], MetaLearner]:
    members: dict[str, Classifier] = {
        "threshold": ThresholdClassifier(threshold_params),
        "linear": LinearClassifier(linear_params),
        "knn": KNNClassifier(knn_params),
    }
    meta = MetaLearner([members[name] for name in BASE_MODEL_NAMES])
    return members, meta


register("threshold", ThresholdClassifier)
register("linear", LinearClassifier)
register("knn", KNNClassifier)
register("meta", lambda: build_default_ensemble()[1])
