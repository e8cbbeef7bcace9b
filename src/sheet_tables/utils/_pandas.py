# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from ..models.record import Record


def records_to_dataframe(records: Sequence[Record], columns: List[str]) -> pd.DataFrame:
    """Build a string-typed DataFrame from records, columns in header order.

    Duplicate header names collapse to one column, matching the record shape.
    """
    unique = list(dict.fromkeys(columns))
    rows = [[r.get(c, "") for c in unique] for r in records]
    return pd.DataFrame(rows, columns=unique, dtype="object")
