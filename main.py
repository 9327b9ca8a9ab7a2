from __future__ import annotations

"""
CLI entrypoint: load a CSV, build the scaled/one-hot design matrix, train the
gradient-descent logistic regression and report test accuracy.
"""

import argparse
import logging
import sys
from pathlib import Path

from tabular_logreg import (
    LogisticRegressionGD,
    TabularLogRegError,
    TrainingConfig,
    build_feature_matrix,
    make_train_test_split,
    split_features_and_label,
)
from tabular_logreg.constants import (
    DEFAULT_ITERATIONS,
    DEFAULT_REPORT_EVERY,
    DEFAULT_STEP_SIZE,
    DEFAULT_TRAIN_FRACTION,
)
from tabular_logreg.data_prep import FeatureMatrix
from tabular_logreg.metrics import (
    base_rate_probabilities,
    confusion_table,
    score_predictions,
    top_weights,
)


def read_csv_lines(csv_path: Path) -> list[str]:
    with open(csv_path, encoding="utf-8") as f:
        return f.read().splitlines()


def describe_features(matrix: FeatureMatrix):
    """Print a short summary of the raw table and the assembled matrix."""
    dims = matrix.dimensions
    print(f"Rows: {dims['rows']}, original columns: {dims['columns']}")
    names = matrix.raw.column_names
    print(f"Numeric columns: {[names[i] for i in matrix.classification.numeric]}")
    print(f"Categorical columns: {[names[i] for i in matrix.classification.categorical]}")
    print(f"Assembled features (incl. intercept): {matrix.shape[1]}")


def print_scores(label: str, y_true, probs):
    """One line of scores plus the confusion table for a set of probabilities."""
    scores = score_predictions(y_true, probs)
    print(
        f"[{label}] Acc {scores['accuracy']:.3f} | "
        f"Prec {scores['precision']:.3f} | Rec {scores['recall']:.3f} | "
        f"F1 {scores['f1']:.3f} | ROC-AUC {scores['roc_auc']:.3f}"
    )
    print(confusion_table(y_true, probs).to_string())


def build_arg_parser():
    """CLI parser with knobs for the split, step size and iteration count."""
    parser = argparse.ArgumentParser(
        description="Train a gradient-descent logistic regression on a CSV file."
    )
    parser.add_argument("--csv-path", type=Path, default=Path("data/census_data.csv"))
    parser.add_argument(
        "--label-column",
        default=None,
        help="Assembled column used as the label (default: last column, e.g. salary_>50K).",
    )
    parser.add_argument(
        "--train-fraction",
        type=float,
        default=DEFAULT_TRAIN_FRACTION,
        help="Share of rows used for training.",
    )
    parser.add_argument("--step-size", type=float, default=DEFAULT_STEP_SIZE)
    parser.add_argument("--iterations", type=int, default=DEFAULT_ITERATIONS)
    parser.add_argument(
        "--report-every",
        type=int,
        default=DEFAULT_REPORT_EVERY,
        help="Print cost and accuracy every N iterations.",
    )
    parser.add_argument(
        "--split-mode",
        choices=["ordered", "random"],
        default="ordered",
        help="Ordered split keeps the first rows for training.",
    )
    parser.add_argument("--random-state", type=int, default=42)
    parser.add_argument(
        "--plot-dir",
        type=Path,
        default=None,
        help="Write training curve, confusion matrix and ROC figures here.",
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser


def config_from_args(args: argparse.Namespace) -> TrainingConfig:
    return TrainingConfig(
        train_fraction=args.train_fraction,
        step_size=args.step_size,
        iterations=args.iterations,
        report_every=args.report_every,
        label_column=args.label_column,
        split_mode=args.split_mode,
        random_state=args.random_state,
    ).validate()


def run_training(args: argparse.Namespace, config: TrainingConfig) -> float:
    """Build features, train, print progress and the final accuracy."""
    matrix = build_feature_matrix(read_csv_lines(args.csv_path))
    describe_features(matrix)

    X, y, feature_names = split_features_and_label(matrix, config.label_column)
    X_train, X_test, y_train, y_test = make_train_test_split(
        X,
        y,
        train_fraction=config.train_fraction,
        mode=config.split_mode,
        random_state=config.random_state,
    )
    print(f"Train size: {len(y_train)}, Test size: {len(y_test)}")

    model = LogisticRegressionGD(
        step_size=config.step_size,
        iterations=config.iterations,
        report_every=config.report_every,
    )

    print("\n######## TRAINING #########\n")
    model.fit(X_train, y_train, X_eval=X_test, y_eval=y_test)
    for record in model.history_:
        print(f"Iteration {record.iteration}: cost: {record.cost}, accuracy: {record.accuracy}")

    print("\n######## PREDICTION ACCURACY #########\n")
    test_accuracy = model.score(X_test, y_test)
    print(f"{test_accuracy * 100}%")

    probs = model.predict_proba(X_test)
    print()
    print_scores("Base rate", y_test, base_rate_probabilities(y_train, len(y_test)))
    print_scores("Gradient descent logistic", y_test, probs)

    print("\nLargest weights:")
    print(top_weights(model.weights_, feature_names, top_k=8).to_string(index=False))
    print(f"\nIntercept: {model.intercept_:.4f}")

    if args.plot_dir is not None:
        from tabular_logreg.plots import plot_confusion_matrix_and_roc, plot_training_history

        args.plot_dir.mkdir(parents=True, exist_ok=True)
        plot_training_history(model.history_, args.plot_dir / "training_history.png")
        plot_confusion_matrix_and_roc(
            y_test,
            probs,
            args.plot_dir / "confusion_matrix.png",
            args.plot_dir / "roc_curve.png",
        )
        print(f"Plots written to {args.plot_dir}")

    return test_accuracy


def main(args: argparse.Namespace | None = None) -> int:
    args = args or build_arg_parser().parse_args()
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
        run_training(args, config)
    except (TabularLogRegError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
