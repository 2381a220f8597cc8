from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy.spatial.distance import cdist

from ..datasets.toy import TOY_DATASET, LabeledPoint, dataset_arrays
from .interfaces import KNNParams, PointLike


class KNNClassifier:
    """Majority vote among the ``k`` nearest training points (Euclidean).

    Neighbors are ranked with a stable sort, so training points at equal
    distance keep their dataset order. A tied vote resolves to class 0, and
    ``k`` larger than the training set uses every training point.
    """

    def __init__(
        self,
        params: KNNParams | None = None,
        train_data: Sequence[LabeledPoint] = TOY_DATASET,
    ) -> None:
        self.params = params or KNNParams()
        if self.params.k < 1:
            raise ValueError(f"KNNClassifier requires k >= 1, got k={self.params.k}")
        if len(train_data) == 0:
            raise ValueError("No training points provided for KNNClassifier")
        self.train_data = train_data
        self._features, self._labels = dataset_arrays(train_data)

    @property
    def k(self) -> int:
        return self.params.k

    def distances(self, point: PointLike) -> np.ndarray:
        query = np.asarray([[point.x, point.y]], dtype=np.float64)
        return cdist(query, self._features, metric="euclidean")[0]

    def neighbors(self, point: PointLike) -> list[int]:
        order = np.argsort(self.distances(point), kind="stable")
        return [int(i) for i in order[: self.params.k]]

    def predict(self, point: PointLike) -> int:
        nearest = self._labels[self.neighbors(point)]
        vote1 = int(np.sum(nearest == 1))
        vote0 = int(np.sum(nearest == 0))
        return 1 if vote1 > vote0 else 0
