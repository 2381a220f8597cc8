from .interfaces import Classifier, KNNParams, LinearParams, PointLike, ThresholdParams
from .knn import KNNClassifier
from .linear import LinearClassifier
from .meta import MetaLearner
from .registry import build_default_ensemble, create, register, registered_models
from .threshold import ThresholdClassifier

__all__ = [
    "Classifier",
    "PointLike",
    "ThresholdParams",
    "LinearParams",
    "KNNParams",
    "ThresholdClassifier",
    "LinearClassifier",
    "KNNClassifier",
    "MetaLearner",
    "build_default_ensemble",
    "create",
    "register",
    "registered_models",
]
