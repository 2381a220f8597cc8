from __future__ import annotations

from typing import Sequence

from .interfaces import Classifier, PointLike


class MetaLearner:
    """Simple majority vote over an ordered set of classifiers.

    Members are kept in construction order. With an even number of members a
    split vote resolves to class 0.
    """

    def __init__(self, members: Sequence[Classifier]) -> None:
        if not members:
            raise ValueError("MetaLearner needs at least one member classifier")
        self.members: tuple[Classifier, ...] = tuple(members)

    def base_predictions(self, point: PointLike) -> list[int]:
        return [int(model.predict(point)) for model in self.members]

    def predict(self, point: PointLike) -> int:
        preds = self.base_predictions(point)
        vote1 = sum(1 for p in preds if p == 1)
        vote0 = sum(1 for p in preds if p == 0)
        return 1 if vote1 > vote0 else 0
