"""
Turn comma-separated tabular data into a scaled, one-hot encoded design matrix
and fit a binary logistic regression to it with batch gradient descent.

This package contains the feature pipeline, the gradient-descent trainer and
evaluation helpers used by main.py.
"""

from .config import TrainingConfig
from .constants import INTERCEPT_COLUMN
from .data_prep import (
    FeatureMatrix,
    build_feature_matrix,
    classify_columns,
    make_train_test_split,
    parse_rows,
    split_features_and_label,
)
from .errors import (
    DimensionMismatchError,
    EmptyFeatureMatrixError,
    EmptySplitError,
    InconsistentRowSizeError,
    LabelColumnError,
    ParseError,
    TabularLogRegError,
)
from .logreg import (
    LogisticRegressionGD,
    TrainingRecord,
    accuracy,
    compute_cost,
    sigmoid,
    train,
    update_weights,
)
from .metrics import score_predictions, top_weights

__all__ = [
    "INTERCEPT_COLUMN",
    "TrainingConfig",
    "FeatureMatrix",
    "build_feature_matrix",
    "classify_columns",
    "make_train_test_split",
    "parse_rows",
    "split_features_and_label",
    "DimensionMismatchError",
    "EmptyFeatureMatrixError",
    "EmptySplitError",
    "InconsistentRowSizeError",
    "LabelColumnError",
    "ParseError",
    "TabularLogRegError",
    "LogisticRegressionGD",
    "TrainingRecord",
    "accuracy",
    "compute_cost",
    "sigmoid",
    "train",
    "update_weights",
    "score_predictions",
    "top_weights",
]
