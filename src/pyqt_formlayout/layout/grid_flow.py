"""Row/column placement of live spans on a fixed-width grid."""

from dataclasses import dataclass
from typing import List, Sequence

from .span_resolver import FULL, Span, clamp_span


@dataclass(frozen=True)
class GridCell:
    row: int
    column: int
    column_span: int


def flow_cells(spans: Sequence[Span], columns: int) -> List[GridCell]:
    """
    Place items left to right, wrapping when a span does not fit.

    ``"full"`` items take a row of their own.
    """
    columns = max(1, columns)
    cells: List[GridCell] = []
    row = 0
    column = 0
    for span in spans:
        if span == FULL:
            if column:
                row += 1
            cells.append(GridCell(row, 0, columns))
            row += 1
            column = 0
            continue

        width = clamp_span(span, columns)
        if column + width > columns:
            row += 1
            column = 0
        cells.append(GridCell(row, column, width))
        column += width
        if column >= columns:
            row += 1
            column = 0
    return cells
