from __future__ import annotations

"""
Report helpers for a finished run. Training-time accuracy lives in
logreg.accuracy; these add the sklearn scores, a confusion table and the
largest learned weights.
"""

import numpy as np
import pandas as pd
from sklearn import metrics

from .constants import DECISION_THRESHOLD, INTERCEPT_COLUMN


def _to_labels(y_true, probs, threshold: float):
    y_true = np.asarray(y_true).astype(int)
    preds = (np.asarray(probs) >= threshold).astype(int)
    return y_true, preds


def score_predictions(y_true, probs, threshold: float = DECISION_THRESHOLD) -> pd.Series:
    """Accuracy, precision, recall, F1 and ROC-AUC for thresholded probabilities."""
    y_true, preds = _to_labels(y_true, probs, threshold)
    precision, recall, f1, _ = metrics.precision_recall_fscore_support(
        y_true, preds, average="binary", zero_division=0
    )
    # ROC-AUC is undefined when the split holds a single class
    if len(np.unique(y_true)) < 2:
        roc_auc = float("nan")
    else:
        roc_auc = metrics.roc_auc_score(y_true, probs)

    return pd.Series(
        {
            "accuracy": metrics.accuracy_score(y_true, preds),
            "precision": precision,
            "recall": recall,
            "f1": f1,
            "roc_auc": roc_auc,
        }
    )


def confusion_table(y_true, probs, threshold: float = DECISION_THRESHOLD) -> pd.DataFrame:
    """Counts with actual labels as rows and predicted labels as columns."""
    y_true, preds = _to_labels(y_true, probs, threshold)
    counts = metrics.confusion_matrix(y_true, preds, labels=[0, 1])
    return pd.DataFrame(
        counts,
        index=pd.Index([0, 1], name="actual"),
        columns=pd.Index([0, 1], name="predicted"),
    )


def base_rate_probabilities(y_train, n_rows: int) -> np.ndarray:
    """Every row gets the training positive rate; a no-feature baseline."""
    return np.full(n_rows, float(np.mean(y_train)))


def top_weights(weights, feature_names: list[str], top_k: int = 8) -> pd.DataFrame:
    """The `top_k` features with the largest absolute weight, intercept excluded."""
    table = pd.DataFrame({"feature": feature_names, "weight": np.asarray(weights, dtype=float)})
    table = table[table["feature"] != INTERCEPT_COLUMN]
    order = table["weight"].abs().sort_values(ascending=False).index
    return table.loc[order].head(top_k).reset_index(drop=True)
