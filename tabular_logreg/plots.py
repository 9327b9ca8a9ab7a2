"""
Figures for a finished run: training curves, confusion matrix and ROC curve.
"""

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from sklearn.metrics import ConfusionMatrixDisplay, auc, confusion_matrix, roc_curve

from .logreg import TrainingRecord


def plot_training_history(history: Sequence[TrainingRecord], filename: Path) -> Path:
    iterations = [record.iteration for record in history]

    fig, (ax_cost, ax_acc) = plt.subplots(1, 2, figsize=(12, 5))
    ax_cost.plot(iterations, [record.cost for record in history], color="darkorange", lw=2)
    ax_cost.set_xlabel("Iteration")
    ax_cost.set_ylabel("Cross-entropy cost")
    ax_cost.set_title("Training cost")
    ax_cost.grid(True)

    ax_acc.plot(iterations, [record.accuracy for record in history], color="navy", lw=2)
    ax_acc.set_xlabel("Iteration")
    ax_acc.set_ylabel("Accuracy")
    ax_acc.set_ylim([0.0, 1.05])
    ax_acc.set_title("Evaluation accuracy")
    ax_acc.grid(True)

    fig.tight_layout()
    fig.savefig(filename)
    plt.close(fig)
    return Path(filename)


def plot_confusion_matrix_and_roc(y_test, y_probs, filename_cm: Path, filename_roc: Path):
    y_test = np.asarray(y_test).astype(int)
    y_pred = (np.asarray(y_probs) >= 0.5).astype(int)

    cm = confusion_matrix(y_test, y_pred, labels=[0, 1])
    disp = ConfusionMatrixDisplay(confusion_matrix=cm)
    disp.plot(cmap="Blues", values_format="d")
    plt.title("Confusion Matrix")
    plt.tight_layout()
    plt.savefig(filename_cm)
    plt.close()

    # ROC is undefined with a single class in the test split
    if len(np.unique(y_test)) < 2:
        return Path(filename_cm), None

    fpr, tpr, _ = roc_curve(y_test, y_probs)
    roc_auc = auc(fpr, tpr)

    plt.figure(figsize=(8, 6))
    plt.plot(fpr, tpr, color="darkorange", lw=2, label=f"ROC curve (area = {roc_auc:.3f})")
    plt.plot([0, 1], [0, 1], color="navy", lw=2, linestyle="--")
    plt.xlim([0.0, 1.0])
    plt.ylim([0.0, 1.05])
    plt.xlabel("False Positive Rate")
    plt.ylabel("True Positive Rate")
    plt.title("ROC Curve")
    plt.legend(loc="lower right")
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(filename_roc)
    plt.close()
    return Path(filename_cm), Path(filename_roc)
