import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from tabular_logreg.errors import DimensionMismatchError
from tabular_logreg.logreg import (
    LogisticRegressionGD,
    accuracy,
    compute_cost,
    sigmoid,
    train,
    update_weights,
)


def test_sigmoid_is_elementwise():
    assert_allclose(
        sigmoid(np.array([0.0, 1.0, 2.0])),
        [0.5, 0.7310585786300049, 0.8807970779778823],
        rtol=1e-15,
    )


def test_sigmoid_properties():
    assert sigmoid(0.0) == 0.5

    z = np.linspace(-30, 30, 601)
    s = sigmoid(z)
    assert np.all(np.diff(s) > 0)
    assert np.all((s > 0) & (s < 1))


def test_sigmoid_does_not_overflow():
    with np.errstate(over="raise"):
        s = sigmoid(np.array([-1e6, 1e6]))
    assert s[0] >= 0.0 and s[1] == 1.0


def test_calculate_cost():
    X = np.array([[0.0, 1.0], [4.0, 5.0]])
    y = np.array([0.0, 1.0])
    weights = np.array([2.0, 2.0])

    assert compute_cost(X, y, weights) == pytest.approx(1.0634640131364754, rel=1e-12)


def test_cost_is_unguarded_unless_eps_given():
    X = np.array([[1000.0]])
    y = np.array([0.0])
    w = np.array([1.0])

    assert math.isinf(compute_cost(X, y, w))
    assert math.isfinite(compute_cost(X, y, w, eps=1e-12))


def test_cost_is_infinite_for_negative_saturation_too():
    X = np.array([[-1000.0]])
    y = np.array([1.0])
    w = np.array([1.0])

    assert sigmoid(X @ w)[0] == 0.0
    assert math.isinf(compute_cost(X, y, w))
    assert math.isfinite(compute_cost(X, y, w, eps=1e-12))


def test_empty_training_set_is_rejected():
    X = np.empty((0, 2))
    y = np.empty(0)
    with pytest.raises(DimensionMismatchError):
        compute_cost(X, y, np.ones(2))
    with pytest.raises(DimensionMismatchError):
        train(X, y, iterations=2)


def test_update_weights_matches_gradient_formula():
    X = np.array([[0.0, 1.0], [4.0, 5.0]])
    y = np.array([0.0, 1.0])
    weights = np.array([2.0, 2.0])

    h = [1 / (1 + math.exp(-2.0)), 1 / (1 + math.exp(-18.0))]
    error = [h[0] - 0.0, h[1] - 1.0]
    expected = [
        2.0 - 0.1 * (0.0 * error[0] + 4.0 * error[1]),
        2.0 - 0.1 * (1.0 * error[0] + 5.0 * error[1]),
    ]

    updated = update_weights(X, y, weights, 0.1)
    assert_allclose(updated, expected, rtol=1e-12)
    assert updated is not weights
    assert weights.tolist() == [2.0, 2.0]


@pytest.mark.parametrize(
    "X, y, w",
    [
        (np.ones((3, 2)), np.ones(3), np.ones(3)),
        (np.ones((3, 2)), np.ones(2), np.ones(2)),
        (np.ones(3), np.ones(3), np.ones(3)),
    ],
)
def test_dimension_mismatch(X, y, w):
    with pytest.raises(DimensionMismatchError):
        compute_cost(X, y, w)
    with pytest.raises(DimensionMismatchError):
        update_weights(X, y, w, 0.1)
    with pytest.raises(DimensionMismatchError):
        accuracy(w, X, y)


def test_accuracy_thresholds_at_one_half():
    X = np.array([[1.0, -2.0], [1.0, 3.0], [1.0, 0.0]])
    weights = np.array([0.0, 1.0])
    y = np.array([0.0, 1.0, 0.0])

    # sigmoid(0) == 0.5 counts as a positive prediction
    assert accuracy(weights, X, y) == pytest.approx(2 / 3)


def test_train_reports_on_schedule(separable_data):
    X, y = separable_data
    weights, history = train(X, y, step_size=0.001, iterations=100, report_every=20)

    assert [record.iteration for record in history] == [1, 20, 40, 60, 80, 100]
    assert weights.shape == (2,)
    assert all(0.0 <= record.accuracy <= 1.0 for record in history)


def test_train_does_not_touch_inputs(separable_data):
    X, y = separable_data
    X_before, y_before = X.copy(), y.copy()
    train(X, y, step_size=0.001, iterations=5, report_every=1)
    assert np.array_equal(X, X_before)
    assert np.array_equal(y, y_before)


def test_training_improves_accuracy_on_separable_data(separable_data):
    X, y = separable_data
    model = LogisticRegressionGD(step_size=0.01, iterations=3000, report_every=100)
    model.fit(X, y)

    accuracies = [record.accuracy for record in model.history_]
    third = len(accuracies) // 3
    assert np.mean(accuracies[-third:]) >= np.mean(accuracies[:third])
    assert model.score(X, y) >= 0.9
    assert model.history_[-1].cost < model.history_[0].cost


def test_model_attributes_after_fit(separable_data):
    X, y = separable_data
    model = LogisticRegressionGD(step_size=0.001, iterations=10, report_every=5).fit(X, y)

    assert model.n_iter_ == 10
    assert model.intercept_ == model.weights_[0]
    assert_allclose(model.coef_, model.weights_[1:])
    assert set(np.unique(model.predict(X))) <= {0, 1}
    assert model.predict_proba(X).shape == (200,)


def test_evaluation_split_is_used_for_reporting(separable_data):
    X, y = separable_data
    flipped = 1.0 - y
    model = LogisticRegressionGD(step_size=0.01, iterations=500, report_every=500)
    model.fit(X, y, X_eval=X, y_eval=flipped)

    assert model.history_[-1].accuracy == pytest.approx(1.0 - model.score(X, y))


def test_predict_before_fit():
    with pytest.raises(RuntimeError):
        LogisticRegressionGD().predict_proba(np.ones((2, 2)))
