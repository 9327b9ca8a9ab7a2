from __future__ import annotations

"""
Feature pipeline: raw comma-separated rows -> scaled numeric columns plus
one-hot categorical columns, assembled behind an intercept column.

Column types are guessed once from the first data row. Numeric columns are
divided by their maximum, categorical columns get one indicator per distinct
value (first-occurrence order). The assembled layout is always
intercept, numeric..., categorical...
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from .constants import (
    DEFAULT_TRAIN_FRACTION,
    FIELD_SEPARATOR,
    INTERCEPT_COLUMN,
    NUMERIC_CHARS,
    ONE_HOT_SEPARATOR,
)
from .errors import (
    EmptyFeatureMatrixError,
    EmptySplitError,
    InconsistentRowSizeError,
    LabelColumnError,
    ParseError,
)

logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(FIELD_SEPARATOR)


@dataclass
class RawTable:
    """Header plus data rows as strings, with the input line of every row."""

    column_names: tuple[str, ...]
    values: np.ndarray  # object array, shape [rows, columns]
    line_numbers: tuple[int, ...]

    @property
    def row_count(self) -> int:
        return self.values.shape[0]

    @property
    def column_count(self) -> int:
        return len(self.column_names)

    @property
    def dimensions(self) -> dict[str, int]:
        return {"rows": self.row_count, "columns": self.column_count}

    def first_row(self) -> list[str]:
        if self.row_count == 0:
            raise EmptyFeatureMatrixError("Input contains a header but no data rows")
        return list(self.values[0])


@dataclass
class ColumnClassification:
    numeric: tuple[int, ...]
    categorical: tuple[int, ...]


@dataclass
class FeatureBlock:
    """A float matrix and, per output column, its name and originating column."""

    values: np.ndarray
    column_names: tuple[str, ...]
    source_columns: tuple[str, ...]


@dataclass
class FeatureMatrix:
    """
    The assembled design matrix. `values` is read-only; `column_names` and
    `source_columns` are parallel to its columns.
    """

    raw: RawTable
    classification: ColumnClassification
    numeric_block: FeatureBlock | None
    categorical_block: FeatureBlock | None
    values: np.ndarray
    column_names: tuple[str, ...]
    source_columns: tuple[str, ...]

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    @property
    def dimensions(self) -> dict[str, int]:
        return self.raw.dimensions

    def column_index(self, name: str) -> int:
        try:
            return self.column_names.index(name)
        except ValueError:
            raise LabelColumnError(name, list(self.column_names)) from None

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.values, columns=list(self.column_names))


def split_fields(line: str) -> list[str]:
    fields = _FIELD_RE.split(line.rstrip("\r\n"))
    # trailing empty fields are dropped, so "1,2,3," has three fields
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def parse_rows(lines: Iterable[str]) -> RawTable:
    """
    Split text rows into fields. The first line is the header; lines with
    fewer than two fields are skipped; any other row must match the header
    width.
    """
    header: list[str] | None = None
    rows: list[list[str]] = []
    line_numbers: list[int] = []

    for line_number, line in enumerate(lines, start=1):
        fields = split_fields(line)
        if header is None:
            header = fields
            continue
        if len(fields) < 2:
            continue
        if len(fields) != len(header):
            raise InconsistentRowSizeError(line_number, len(header), len(fields))
        rows.append(fields)
        line_numbers.append(line_number)

    if header is None:
        raise EmptyFeatureMatrixError("Input is empty; expected a header row")

    values = np.empty((len(rows), len(header)), dtype=object)
    for i, fields in enumerate(rows):
        values[i, :] = fields

    return RawTable(tuple(header), values, tuple(line_numbers))


def is_numeric_field(value: str) -> bool:
    return all(ch in NUMERIC_CHARS for ch in value)


def classify_columns(first_row: Sequence[str]) -> ColumnClassification:
    """
    Numeric if every character of the first row's field is a digit, '.' or '-'.
    Later rows are not inspected; a mismatch surfaces as ParseError when scaling.
    """
    numeric, categorical = [], []
    for index, value in enumerate(first_row):
        (numeric if is_numeric_field(value) else categorical).append(index)
    return ColumnClassification(tuple(numeric), tuple(categorical))


def _parse_numeric_column(table: RawTable, index: int) -> np.ndarray:
    raw = pd.Series(table.values[:, index], dtype=object)
    parsed = pd.to_numeric(raw, errors="coerce")
    bad_rows = np.flatnonzero(parsed.isna().to_numpy())
    if len(bad_rows):
        row = int(bad_rows[0])
        raise ParseError(table.line_numbers[row], table.column_names[index], raw.iloc[row])
    return parsed.to_numpy(dtype=float)


def build_scaled_numeric_matrix(
    table: RawTable, numeric_columns: Sequence[int]
) -> FeatureBlock | None:
    """Parse numeric columns and divide each one by its own maximum."""
    if not numeric_columns:
        return None

    names = tuple(table.column_names[i] for i in numeric_columns)
    values = np.column_stack([_parse_numeric_column(table, i) for i in numeric_columns])
    maxima = values.max(axis=0)

    for name, col_max in zip(names, maxima):
        if not col_max > 0:
            logger.warning(
                "Column %r has non-positive maximum %s; scaled values are sign-flipped or undefined",
                name,
                col_max,
            )

    with np.errstate(divide="ignore", invalid="ignore"):
        scaled = values / maxima

    return FeatureBlock(scaled, names, names)


def build_one_hot_matrix(
    table: RawTable, categorical_columns: Sequence[int]
) -> FeatureBlock | None:
    """
    One indicator column per distinct value, in first-occurrence order:

        animal, habitat      animal_zebra, animal_tiger, habitat_savannah, habitat_forest
        zebra,  savannah  =>            1,            0,                1,              0
        tiger,  savannah                0,            1,                1,              0
        tiger,  forest                  0,            1,                0,              1
    """
    if not categorical_columns:
        return None

    blocks, names, sources = [], [], []
    for index in categorical_columns:
        name = table.column_names[index]
        column = table.values[:, index]
        categories = pd.unique(column)
        indicators = pd.get_dummies(
            pd.Categorical(column, categories=categories),
            prefix=name,
            prefix_sep=ONE_HOT_SEPARATOR,
            dtype=float,
        )
        blocks.append(indicators.to_numpy())
        names.extend(indicators.columns)
        sources.extend([name] * len(categories))

    return FeatureBlock(np.hstack(blocks), tuple(names), tuple(sources))


def assemble_matrix(
    numeric_block: FeatureBlock | None,
    categorical_block: FeatureBlock | None,
    row_count: int,
) -> FeatureBlock:
    """Intercept column, then numeric, then categorical. Returns a read-only block."""
    blocks = [block for block in (numeric_block, categorical_block) if block is not None]
    if not blocks:
        raise EmptyFeatureMatrixError("Scaling and encoding produced no feature columns")

    values = np.hstack([np.ones((row_count, 1))] + [block.values for block in blocks])
    values.setflags(write=False)

    names = (INTERCEPT_COLUMN,) + sum((block.column_names for block in blocks), ())
    sources = (INTERCEPT_COLUMN,) + sum((block.source_columns for block in blocks), ())
    return FeatureBlock(values, names, sources)


def build_feature_matrix(lines: Iterable[str]) -> FeatureMatrix:
    """Run the whole pipeline over text rows (header first)."""
    table = parse_rows(lines)
    classification = classify_columns(table.first_row())

    numeric_block = build_scaled_numeric_matrix(table, classification.numeric)
    categorical_block = build_one_hot_matrix(table, classification.categorical)
    assembled = assemble_matrix(numeric_block, categorical_block, table.row_count)

    logger.info(
        "Loaded %d rows x %d columns (%d numeric, %d categorical) -> %d features",
        table.row_count,
        table.column_count,
        len(classification.numeric),
        len(classification.categorical),
        assembled.values.shape[1],
    )

    return FeatureMatrix(
        raw=table,
        classification=classification,
        numeric_block=numeric_block,
        categorical_block=categorical_block,
        values=assembled.values,
        column_names=assembled.column_names,
        source_columns=assembled.source_columns,
    )


def split_features_and_label(
    matrix: FeatureMatrix, label_column: str | None = None
) -> tuple[np.ndarray, np.ndarray, list[str]]:
    """
    Pull out the label column (last column by default) and drop every column
    derived from the same original column, so a binary categorical label does
    not leak through its complementary indicator.
    """
    label = label_column or matrix.column_names[-1]
    label_index = matrix.column_index(label)
    label_source = matrix.source_columns[label_index]

    keep = [i for i, source in enumerate(matrix.source_columns) if source != label_source]
    X = matrix.values[:, keep]
    y = matrix.values[:, label_index]
    return X, y, [matrix.column_names[i] for i in keep]


def make_train_test_split(
    X: np.ndarray,
    y: np.ndarray,
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    mode: str = "ordered",
    random_state: int | None = 42,
    stratify: bool = False,
):
    """
    Ordered mode keeps the first `int(rows * train_fraction)` rows for training;
    random mode shuffles (optionally stratified on y). Both sides must get at
    least one row.
    """
    if mode not in ("ordered", "random"):
        raise ValueError(f"Unknown split mode: {mode}")

    cutoff = int(X.shape[0] * train_fraction)
    if cutoff == 0 or cutoff == X.shape[0]:
        raise EmptySplitError(X.shape[0], train_fraction)

    if mode == "ordered":
        return X[:cutoff], X[cutoff:], y[:cutoff], y[cutoff:]
    return train_test_split(
        X,
        y,
        train_size=train_fraction,
        random_state=random_state,
        stratify=y if stratify else None,
    )
