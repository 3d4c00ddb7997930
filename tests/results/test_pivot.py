"""Tests for the long-to-wide pivot."""
import itertools

import numpy as np
import pandas as pd
import pytest

from metadata_manager.common.sentinel import MISSING_VALUE_SENTINEL
from metadata_manager.results.pivot import ROW_KEY_COLUMN, pivot


ROWS = [3, 7, 11]
COLUMNS = ["A with configuration: cfg1", "B with configuration: cfg2"]


def test_empty_input_gives_all_absent_table():
    table = pivot(ROWS, COLUMNS, [])

    assert table.shape == (len(ROWS), len(COLUMNS) + 1)
    assert list(table.columns) == [ROW_KEY_COLUMN] + COLUMNS
    assert table[ROW_KEY_COLUMN].tolist() == ROWS
    assert table[COLUMNS].isna().all().all()


def test_every_pair_present():
    triples = [(row, column, float(row) + index / 10)
               for row, (index, column) in itertools.product(ROWS, enumerate(COLUMNS))]

    table = pivot(ROWS, COLUMNS, triples).set_index(ROW_KEY_COLUMN)

    for row, (index, column) in itertools.product(ROWS, enumerate(COLUMNS)):
        assert table.loc[row, column] == pytest.approx(float(row) + index / 10)


def test_sparse_scenario():
    table = pivot([3, 7], ["A|cfg1", "B|cfg2"], [(3, "A|cfg1", 0.9)])

    assert table[ROW_KEY_COLUMN].tolist() == [3, 7]
    first, second = table.iloc[0], table.iloc[1]
    assert first["A|cfg1"] == pytest.approx(0.9)
    assert np.isnan(first["B|cfg2"])
    assert np.isnan(second["A|cfg1"]) and np.isnan(second["B|cfg2"])


def test_rows_ascend_regardless_of_input_order():
    triples = [(11, "x", 1.0), (3, "x", 2.0), (7, "x", 3.0)]

    table = pivot([11, 3, 7], ["x"], triples)

    assert table[ROW_KEY_COLUMN].tolist() == [3, 7, 11]
    assert table["x"].tolist() == [2.0, 3.0, 1.0]


def test_columns_keep_universe_order():
    table = pivot([1], ["zeta", "alpha", "mid"], [])
    assert list(table.columns) == [ROW_KEY_COLUMN, "zeta", "alpha", "mid"]


def test_sentinel_decodes_to_nan():
    table = pivot([1], ["x", "y"], [(1, "x", MISSING_VALUE_SENTINEL), (1, "y", 0.5)])

    assert np.isnan(table.loc[0, "x"])
    assert table.loc[0, "y"] == pytest.approx(0.5)


def test_last_duplicate_wins():
    triples = [(1, "x", 0.1), (1, "x", 0.2), (1, "x", 0.3)]
    table = pivot([1], ["x"], triples)
    assert table.loc[0, "x"] == pytest.approx(0.3)


def test_unknown_keys_are_dropped():
    triples = [(1, "x", 0.1), (2, "x", 0.2), (1, "unknown", 0.3)]

    table = pivot([1], ["x"], triples)

    assert table.shape == (1, 2)
    assert table.loc[0, "x"] == pytest.approx(0.1)


def test_no_rows():
    table = pivot([], COLUMNS, [(3, COLUMNS[0], 0.5)])

    assert table.empty
    assert list(table.columns) == [ROW_KEY_COLUMN] + COLUMNS


def test_no_columns():
    table = pivot([5, 2], [], [(2, "x", 0.5)])

    assert list(table.columns) == [ROW_KEY_COLUMN]
    assert table[ROW_KEY_COLUMN].tolist() == [2, 5]


def test_measurement_columns_are_float():
    table = pivot([1, 2], ["x"], [(1, "x", 1)])
    assert pd.api.types.is_float_dtype(table["x"])


def test_name_is_attached():
    table = pivot([1], ["x"], [], name="all_trees_performanceValues")
    assert table.attrs["name"] == "all_trees_performanceValues"


def test_repeated_column_keys_collapse():
    table = pivot([1], ["x", "y", "x"], [(1, "x", 0.5)])

    assert list(table.columns) == [ROW_KEY_COLUMN, "x", "y"]
    assert table.loc[0, "x"] == pytest.approx(0.5)
    assert np.isnan(table.loc[0, "y"])
