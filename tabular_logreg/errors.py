from __future__ import annotations

"""
Exceptions raised by the feature pipeline and the trainer. Every failure is
terminal for the run; the CLI catches the base class and exits.
"""


class TabularLogRegError(Exception):
    """Base class for all pipeline and training failures."""


class InconsistentRowSizeError(TabularLogRegError, ValueError):
    def __init__(self, line_number: int, expected: int, found: int):
        self.line_number = line_number
        self.expected = expected
        self.found = found
        super().__init__(
            "All rows should have the same number of columns. "
            f"Found mismatch at line {line_number}. "
            f"Expected {expected} columns, found {found}"
        )


class ParseError(TabularLogRegError, ValueError):
    def __init__(self, line_number: int, column: str, value: str):
        self.line_number = line_number
        self.column = column
        self.value = value
        super().__init__(
            f"Could not parse {value!r} as a number in column {column!r} at line {line_number}"
        )


class EmptyFeatureMatrixError(TabularLogRegError, ValueError):
    """Neither numeric nor categorical columns produced any features."""


class DimensionMismatchError(TabularLogRegError, ValueError):
    """Shapes of X, y and the weight vector disagree."""


class LabelColumnError(TabularLogRegError, KeyError):
    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Unknown label column {name!r}; available: {available}")

    def __str__(self) -> str:
        return self.args[0]


class EmptySplitError(TabularLogRegError, ValueError):
    def __init__(self, row_count: int, train_fraction: float):
        self.row_count = row_count
        self.train_fraction = train_fraction
        super().__init__(
            f"Splitting {row_count} rows with train fraction {train_fraction} "
            "leaves the training or test set empty"
        )
