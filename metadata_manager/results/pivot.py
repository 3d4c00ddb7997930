"""Long-to-wide projection of measurements into a dense, data set indexed table."""
import logging
from typing import Hashable, Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from metadata_manager.common.sentinel import decode_measurement

logger = logging.getLogger(__name__)

ROW_KEY_COLUMN = "dataset_id"

# An absent cell, i.e. no measurement exists for the (row, column) pair.
ABSENT = np.nan

SparseRow = Tuple[int, Hashable, Optional[float]]


def pivot(row_keys: Iterable[int],
          column_keys: Sequence[Hashable],
          sparse_rows: Iterable[SparseRow],
          name: Optional[str] = None) -> pd.DataFrame:
    """Build a dense table from sparse ``(row key, column key, stored value)`` triples.

    The row and column universes decide the shape of the result: every row
    key and every column key appears even when no triple refers to it, and
    triples outside either universe are dropped. Stored values are decoded
    with :func:`decode_measurement`. When a pair occurs more than once the
    last triple wins; callers should not rely on this.

    Args:
        row_keys: Data set ids, one output row each (duplicates collapse).
        column_keys: Column labels in output order (repeats collapse).
        sparse_rows: Triples as read from the database.
        name: Stored in ``DataFrame.attrs["name"]``.

    Returns:
        pd.DataFrame with a ``dataset_id`` column followed by one column per
        column key, rows ascending by data set id, absent cells set to NaN.
    """
    column_keys = list(dict.fromkeys(column_keys))
    column_index = {key: position for position, key in enumerate(column_keys)}
    cells = {int(row_key): [ABSENT] * len(column_keys) for row_key in row_keys}

    dropped = 0
    for row_key, column_key, stored_value in sparse_rows:
        row = cells.get(int(row_key))
        position = column_index.get(column_key)
        if row is None or position is None:
            dropped += 1
            continue
        row[position] = decode_measurement(stored_value)

    if dropped:
        logger.debug("Dropped %d measurements outside the requested rows/columns", dropped)

    data = [[row_key] + cells[row_key] for row_key in sorted(cells)]
    frame = pd.DataFrame(data, columns=[ROW_KEY_COLUMN] + column_keys)
    frame[ROW_KEY_COLUMN] = frame[ROW_KEY_COLUMN].astype("int64")
    if column_keys:
        frame[column_keys] = frame[column_keys].astype(float)
    if name is not None:
        frame.attrs["name"] = name
    return frame
