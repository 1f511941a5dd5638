"""Live grid column count from the measured container width."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .layout_config import (
    COLLAPSE_AT_FALLBACK_PX,
    GAP_FALLBACK_PX,
    MIN_COLUMN_FALLBACK_PX,
    LayoutConfig,
    MeasureFn,
    length_to_px,
)
from .span_resolver import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnMetrics:
    """Pixel values of the dimension-like config entries."""
    gap_px: float
    min_column_px: float
    collapse_at_px: float

    @classmethod
    def resolve(cls, config: LayoutConfig, measure: Optional[MeasureFn] = None) -> 'ColumnMetrics':
        return cls(
            gap_px=length_to_px(config.gap, GAP_FALLBACK_PX, measure),
            min_column_px=length_to_px(config.min_column_width, MIN_COLUMN_FALLBACK_PX, measure),
            collapse_at_px=length_to_px(config.collapse_at, COLLAPSE_AT_FALLBACK_PX, measure),
        )


def compute_columns(container_width_px: Optional[float], config: LayoutConfig,
                    previous_columns: Optional[int] = None,
                    measure: Optional[MeasureFn] = None) -> int:
    """
    Number of grid columns for a container width.

    Args:
        container_width_px: Measured width, or None when there is no geometry
        config: Layout configuration for this pass
        previous_columns: Count from the last snapshot, kept when width is unusable
        measure: Length-to-pixel measurement primitive

    Returns:
        Columns in ``[1, config.max_columns]``. An unusable width returns
        ``previous_columns`` unchanged (1 on the first pass).
    """
    if container_width_px is None or not math.isfinite(container_width_px) or container_width_px <= 0:
        kept = previous_columns if previous_columns is not None else 1
        logger.debug(f"No usable container width ({container_width_px!r}), keeping {kept} column(s)")
        return kept

    metrics = ColumnMetrics.resolve(config, measure)
    if container_width_px <= metrics.collapse_at_px:
        return 1

    candidate = math.floor(
        (container_width_px + metrics.gap_px) / (max(1.0, metrics.min_column_px) + metrics.gap_px)
    )
    return clamp(candidate, 1, config.max_columns)
