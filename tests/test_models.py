import unittest

import numpy as np

from metavote.datasets.toy import TOY_DATASET, LabeledPoint, Point, dataset_arrays, label_counts
from metavote.models import (
    KNNClassifier,
    KNNParams,
    LinearClassifier,
    LinearParams,
    MetaLearner,
    ThresholdClassifier,
    ThresholdParams,
    build_default_ensemble,
    create,
    register,
    registered_models,
)


class _Constant:
    def __init__(self, label: int):
        self.label = label

    def predict(self, point) -> int:
        return self.label


class TestDataset(unittest.TestCase):
    def test_fixed_twenty_points(self):
        self.assertEqual(len(TOY_DATASET), 20)
        self.assertEqual(label_counts(), {0: 10, 1: 10})
        self.assertEqual(TOY_DATASET[0], LabeledPoint(x=1.0, y=2.0, label=0))
        self.assertEqual(TOY_DATASET[10], LabeledPoint(x=2.0, y=1.0, label=1))
        self.assertEqual(TOY_DATASET[19], LabeledPoint(x=1.5, y=1.5, label=1))

    def test_arrays_preserve_order(self):
        features, labels = dataset_arrays()
        self.assertEqual(features.shape, (20, 2))
        self.assertEqual(labels.dtype, np.int32)
        np.testing.assert_array_equal(features[6], [2.5, 1.5])
        self.assertEqual(labels.tolist(), [0] * 10 + [1] * 10)

    def test_points_are_immutable(self):
        with self.assertRaises(Exception):
            TOY_DATASET[0].x = 9.0


class TestThresholdClassifier(unittest.TestCase):
    def test_split(self):
        model = ThresholdClassifier()
        self.assertEqual(model.split_x, 3.5)
        self.assertEqual(model.predict(Point(3.4999, 100.0)), 0)
        self.assertEqual(model.predict(Point(3.5, -100.0)), 1)
        self.assertEqual(model.predict(Point(-1.0, 0.0)), 0)

    def test_custom_split(self):
        model = ThresholdClassifier(ThresholdParams(split_x=0.0))
        self.assertEqual(model.predict(Point(-0.1, 0.0)), 0)
        self.assertEqual(model.predict(Point(0.0, 0.0)), 1)


class TestLinearClassifier(unittest.TestCase):
    def test_score_and_sign(self):
        model = LinearClassifier()
        self.assertAlmostEqual(model.score(Point(2.0, 1.0)), -0.8)
        self.assertAlmostEqual(model.score(Point(5.0, 5.0)), -0.5)
        self.assertEqual(model.predict(Point(2.0, 1.0)), 0)
        self.assertEqual(model.predict(Point(6.0, 0.0)), 1)

    def test_boundary_is_class_zero(self):
        model = LinearClassifier()
        self.assertEqual(model.score(Point(3.0, 0.0)), 0.0)
        self.assertEqual(model.predict(Point(3.0, 0.0)), 0)
        self.assertEqual(model.predict(Point(3.1, 0.0)), 1)

    def test_rejects_wrong_weight_count(self):
        with self.assertRaises(ValueError):
            LinearClassifier(LinearParams(weights=(1.0, 2.0, 3.0), bias=0.0))


class TestKNNClassifier(unittest.TestCase):
    def test_query_on_training_point(self):
        model = KNNClassifier()
        self.assertEqual(model.neighbors(Point(2.0, 1.0)), [10, 6, 19])
        self.assertEqual(model.predict(Point(2.0, 1.0)), 1)

    def test_query_far_corner(self):
        model = KNNClassifier()
        self.assertEqual(model.neighbors(Point(5.0, 5.0)), [13, 17, 3])
        self.assertEqual(model.predict(Point(5.0, 5.0)), 1)

    def test_distance_tie_keeps_dataset_order(self):
        # Points 6 and 19 are both at sqrt(0.5) from (2, 1); 6 comes first.
        model = KNNClassifier(KNNParams(k=2))
        distances = model.distances(Point(2.0, 1.0))
        self.assertEqual(distances[6], distances[19])
        self.assertEqual(model.neighbors(Point(2.0, 1.0)), [10, 6])
        # One vote each: tied vote resolves to class 0.
        self.assertEqual(model.predict(Point(2.0, 1.0)), 0)

    def test_k_larger_than_dataset_uses_all_points(self):
        model = KNNClassifier(KNNParams(k=50))
        self.assertEqual(len(model.neighbors(Point(0.0, 0.0))), 20)
        # 10 vs 10 is a tie.
        self.assertEqual(model.predict(Point(0.0, 0.0)), 0)

    def test_permutation_invariance(self):
        rng = np.random.default_rng(7)
        reference = KNNClassifier()
        for _ in range(5):
            order = rng.permutation(len(TOY_DATASET))
            shuffled = KNNClassifier(train_data=[TOY_DATASET[i] for i in order])
            for point in [Point(5.0, 5.0), Point(3.0, 3.0), Point(0.0, 0.0)]:
                self.assertEqual(shuffled.predict(point), reference.predict(point))

    def test_invalid_construction(self):
        with self.assertRaises(ValueError):
            KNNClassifier(KNNParams(k=0))
        with self.assertRaises(ValueError):
            KNNClassifier(train_data=[])


class TestMetaLearner(unittest.TestCase):
    def test_concrete_scenarios(self):
        members, meta = build_default_ensemble()
        point = Point(2.0, 1.0)
        self.assertEqual(meta.base_predictions(point), [0, 0, 1])
        self.assertEqual(meta.predict(point), 0)

        point = Point(5.0, 5.0)
        self.assertEqual(meta.base_predictions(point), [1, 0, 1])
        self.assertEqual(meta.predict(point), 1)
        self.assertEqual(list(members.keys()), ["threshold", "linear", "knn"])

    def test_majority_of_three(self):
        members, meta = build_default_ensemble()
        for x in np.arange(-1.0, 7.0, 0.5):
            for y in np.arange(-1.0, 6.0, 0.5):
                point = Point(float(x), float(y))
                votes = sum(model.predict(point) for model in members.values())
                self.assertEqual(meta.predict(point), 1 if votes >= 2 else 0)

    def test_even_split_resolves_to_zero(self):
        meta = MetaLearner([ThresholdClassifier(), LinearClassifier()])
        self.assertEqual(meta.base_predictions(Point(5.0, 5.0)), [1, 0])
        self.assertEqual(meta.predict(Point(5.0, 5.0)), 0)
        self.assertEqual(MetaLearner([_Constant(1), _Constant(0)]).predict(Point(0.0, 0.0)), 0)
        self.assertEqual(MetaLearner([_Constant(1)]).predict(Point(0.0, 0.0)), 1)

    def test_empty_members_rejected(self):
        with self.assertRaises(ValueError):
            MetaLearner([])

    def test_predict_is_idempotent(self):
        _, meta = build_default_ensemble()
        point = Point(3.0, 2.5)
        first = meta.predict(point)
        for _ in range(10):
            self.assertEqual(meta.predict(point), first)

    def test_labels_always_binary(self):
        members, meta = build_default_ensemble()
        models = [*members.values(), meta]
        for p in TOY_DATASET:
            for model in models:
                label = model.predict(p)
                self.assertIsInstance(label, int)
                self.assertIn(label, (0, 1))


class TestRegistry(unittest.TestCase):
    def test_builtin_names(self):
        for name in ["threshold", "linear", "knn", "meta"]:
            self.assertIn(name, registered_models())
        self.assertIsInstance(create("knn"), KNNClassifier)
        self.assertIsInstance(create("meta"), MetaLearner)

    def test_unknown_name(self):
        with self.assertRaises(ValueError) as ctx:
            create("svm")
        self.assertIn("Registered", str(ctx.exception))

    def test_register_custom(self):
        register("always_one", lambda: _Constant(1))
        self.assertEqual(create("always_one").predict(Point(0.0, 0.0)), 1)


if __name__ == "__main__":
    unittest.main()
