from __future__ import annotations

"""
Logistic regression trained with plain batch gradient descent.
Weights start at one, the step is fixed and training runs for a fixed number
of iterations. Inputs are expected to be scaled already (see data_prep).
"""

import logging
from dataclasses import dataclass

import numpy as np

from .constants import (
    DECISION_THRESHOLD,
    DEFAULT_ITERATIONS,
    DEFAULT_REPORT_EVERY,
    DEFAULT_STEP_SIZE,
)
from .errors import DimensionMismatchError

logger = logging.getLogger(__name__)


def sigmoid(z: np.ndarray) -> np.ndarray:
    z = np.asarray(z, dtype=float)
    # exp overflows to inf for very negative z, and 1 / (1 + inf) is exactly 0
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-z))


def check_dimensions(X: np.ndarray, y: np.ndarray | None, weights: np.ndarray) -> None:
    if X.ndim != 2:
        raise DimensionMismatchError(f"X must be 2-dimensional, got shape {X.shape}")
    if X.shape[0] == 0:
        raise DimensionMismatchError("X has no rows")
    if weights.shape != (X.shape[1],):
        raise DimensionMismatchError(
            f"weights of shape {weights.shape} do not match X with {X.shape[1]} columns"
        )
    if y is not None and y.shape != (X.shape[0],):
        raise DimensionMismatchError(
            f"y of shape {y.shape} does not match X with {X.shape[0]} rows"
        )


def compute_cost(X, y, weights, eps: float | None = None) -> float:
    """
    Average cross-entropy of sigmoid(X @ weights) against y.

    Saturated activations make the log terms infinite; pass `eps` to clamp
    activations into [eps, 1 - eps] instead.
    """
    X, y, weights = (np.asarray(a, dtype=float) for a in (X, y, weights))
    check_dimensions(X, y, weights)

    h = sigmoid(X @ weights)
    if eps is not None:
        h = np.clip(h, eps, 1.0 - eps)

    with np.errstate(divide="ignore", invalid="ignore"):
        total = np.sum(y * np.log(h) + (1.0 - y) * np.log(1.0 - h))
    return float(total * (-1.0 / X.shape[0]))


def update_weights(X, y, weights, step_size: float) -> np.ndarray:
    """One gradient step; returns a new weight vector."""
    X, y, weights = (np.asarray(a, dtype=float) for a in (X, y, weights))
    check_dimensions(X, y, weights)

    error = sigmoid(X @ weights) - y
    return weights - step_size * (X.T @ error)


def accuracy(weights, X, y, threshold: float = DECISION_THRESHOLD) -> float:
    """Fraction of rows where sigmoid(X @ weights), cut at `threshold`, equals y."""
    X, y, weights = (np.asarray(a, dtype=float) for a in (X, y, weights))
    check_dimensions(X, y, weights)

    predicted = np.where(sigmoid(X @ weights) < threshold, 0.0, 1.0)
    return float(np.mean(predicted == y))


@dataclass(frozen=True)
class TrainingRecord:
    iteration: int
    cost: float
    accuracy: float


def train(
    X_train,
    y_train,
    step_size: float = DEFAULT_STEP_SIZE,
    iterations: int = DEFAULT_ITERATIONS,
    report_every: int = DEFAULT_REPORT_EVERY,
    X_eval=None,
    y_eval=None,
) -> tuple[np.ndarray, list[TrainingRecord]]:
    """
    Run the fixed-iteration loop. At iteration 1 and every `report_every`
    iterations the updated weights are scored on the evaluation split
    (the training split when none is given).
    """
    X_train = np.asarray(X_train, dtype=float)
    y_train = np.asarray(y_train, dtype=float)
    X_eval = X_train if X_eval is None else np.asarray(X_eval, dtype=float)
    y_eval = y_train if y_eval is None else np.asarray(y_eval, dtype=float)

    weights = np.ones(X_train.shape[1])
    check_dimensions(X_train, y_train, weights)
    check_dimensions(X_eval, y_eval, weights)

    history: list[TrainingRecord] = []
    for step in range(1, iterations + 1):
        cost = compute_cost(X_train, y_train, weights)
        weights = update_weights(X_train, y_train, weights, step_size)

        if step == 1 or step % report_every == 0:
            record = TrainingRecord(step, cost, accuracy(weights, X_eval, y_eval))
            history.append(record)
            logger.info(
                "Iteration %d: cost: %s, accuracy: %s",
                record.iteration,
                record.cost,
                record.accuracy,
            )

    return weights, history


class LogisticRegressionGD:
    """
    Estimator wrapper around `train`. The intercept is expected to be the
    first column of X, as produced by data_prep.build_feature_matrix.
    """

    def __init__(
        self,
        step_size: float = DEFAULT_STEP_SIZE,
        iterations: int = DEFAULT_ITERATIONS,
        report_every: int = DEFAULT_REPORT_EVERY,
    ):
        self.step_size = step_size
        self.iterations = iterations
        self.report_every = report_every
        self.weights_: np.ndarray | None = None
        self.history_: list[TrainingRecord] = []
        self.n_iter_: int = 0

    def fit(self, X, y, X_eval=None, y_eval=None):
        """Train from all-ones weights for `iterations` steps."""
        self.weights_, self.history_ = train(
            X,
            y,
            step_size=self.step_size,
            iterations=self.iterations,
            report_every=self.report_every,
            X_eval=X_eval,
            y_eval=y_eval,
        )
        self.n_iter_ = self.iterations
        self.intercept_ = float(self.weights_[0])
        self.coef_ = self.weights_[1:]
        return self

    def _check_fitted(self) -> np.ndarray:
        if self.weights_ is None:
            raise RuntimeError("Model is not fitted.")
        return self.weights_

    def predict_proba(self, X) -> np.ndarray:
        """Return P(y=1) for each row in X."""
        weights = self._check_fitted()
        X_arr = np.asarray(X, dtype=float)
        check_dimensions(X_arr, None, weights)
        return sigmoid(X_arr @ weights)

    def predict(self, X, threshold: float = DECISION_THRESHOLD) -> np.ndarray:
        """Binary predictions using the provided threshold."""
        return (self.predict_proba(X) >= threshold).astype(int)

    def score(self, X, y) -> float:
        return accuracy(self._check_fitted(), X, y)
