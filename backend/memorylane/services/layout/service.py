"""Justified photo-row layout planner.

Partitions an ordered list of photos into rows so that every row exactly
fills the container width, choosing the partition whose row heights deviate
least from a target height. This is optimal line breaking (as in TeX's
paragraph builder) with photos instead of words:

- A row holding photos ``j..i`` must be ``container_width / sum(aspect)``
  tall to fill the width exactly.
- Its cost is the squared deviation from the target height, plus a fixed
  penalty when the row is far too tall or far too short.
- ``dp[i + 1] = min(dp[j] + cost(j, i))`` over every possible row start ``j``,
  filled iteratively, then the break points are walked back from the end.

Galleries of one to three photos go through the same program; there are no
preset heights for small counts.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from memorylane.models import LayoutRow, Photo

logger = logging.getLogger(__name__)

DEFAULT_TARGET_ROW_HEIGHT = 250.0


class RowLayoutPlanner:
    """Dynamic-programming row planner.

    The class constants are part of the layout's observable behavior; changing
    them changes which partitions win.
    """

    PENALTY = 100000.0
    TOO_TALL_FACTOR = 2.5    # single portrait photos end up here
    TOO_SHORT_FACTOR = 0.5   # too many photos crammed into one row
    CLAMP_FACTOR = 1.5       # rendered height cap, output only

    def __init__(self, target_row_height: float = DEFAULT_TARGET_ROW_HEIGHT) -> None:
        if target_row_height <= 0:
            raise ValueError(f"Target row height must be positive, got {target_row_height}")
        self._target = float(target_row_height)

    @property
    def target_row_height(self) -> float:
        return self._target

    def row_cost(self, row_height: float) -> float:
        """Badness of a row rendered ``row_height`` units tall."""
        cost = (row_height - self._target) ** 2
        if row_height > self._target * self.TOO_TALL_FACTOR:
            cost += self.PENALTY
        if row_height < self._target * self.TOO_SHORT_FACTOR:
            cost += self.PENALTY
        return cost

    def plan_breaks(
        self, aspects: NDArray[np.float64], container_width: float
    ) -> list[tuple[int, int]]:
        """Find the cheapest partition of ``aspects`` into rows.

        Returns:
            Half-open ``(start, end)`` index spans, left to right. Empty when
            there is nothing to lay out.
        """
        n = len(aspects)
        if n == 0 or container_width <= 0:
            return []

        dp = np.full(n + 1, np.inf, dtype=np.float64)
        break_at = np.zeros(n + 1, dtype=np.int64)
        dp[0] = 0.0

        for i in range(n):
            aspect_sum = 0.0
            # Scan row starts right to left; strict < keeps the shortest last row on ties
            for j in range(i, -1, -1):
                aspect_sum += aspects[j]
                total = dp[j] + self.row_cost(container_width / aspect_sum)
                if total < dp[i + 1]:
                    dp[i + 1] = total
                    break_at[i + 1] = j

        spans = []
        end = n
        while end > 0:
            start = int(break_at[end])
            spans.append((start, end))
            end = start
        spans.reverse()

        logger.debug(f"[LAYOUT] {n} photos -> {len(spans)} rows, cost={dp[n]:.1f}")
        return spans

    def partition_cost(
        self,
        aspects: NDArray[np.float64],
        spans: list[tuple[int, int]],
        container_width: float,
    ) -> float:
        """Total cost of an arbitrary partition given as ``(start, end)`` spans."""
        return sum(
            self.row_cost(container_width / float(np.sum(aspects[start:end])))
            for start, end in spans
        )

    def rendered_height(self, aspect_sum: float, container_width: float) -> float:
        """Final height for a row, with very tall rows clamped to the target."""
        height = container_width / aspect_sum
        if height > self._target * self.CLAMP_FACTOR:
            return self._target
        return height

    def compute_layout(self, photos: list[Photo], container_width: float) -> list[LayoutRow]:
        """Lay ``photos`` out in justified rows for a container ``container_width`` wide.

        Args:
            photos: Photos in display order. Every photo must already carry a
                positive aspect ratio (see ``memorylane.services.photos``).
            container_width: Width measured by the presentation layer.

        Returns:
            Rows covering every photo exactly once, in the original order.
            Empty for an empty gallery or a non-positive width.
        """
        if container_width <= 0 or not photos:
            return []

        aspects = np.array([photo.aspect_ratio for photo in photos], dtype=np.float64)
        if np.any(aspects <= 0):
            raise ValueError("Every photo needs a positive aspect ratio before layout")

        rows = []
        for start, end in self.plan_breaks(aspects, container_width):
            aspect_sum = float(np.sum(aspects[start:end]))
            rows.append(
                LayoutRow(
                    photos=photos[start:end],
                    height=self.rendered_height(aspect_sum, container_width),
                )
            )
        return rows


def compute_layout(
    photos: list[Photo],
    container_width: float,
    target_row_height: float = DEFAULT_TARGET_ROW_HEIGHT,
) -> list[LayoutRow]:
    """Convenience wrapper around ``RowLayoutPlanner.compute_layout``."""
    return RowLayoutPlanner(target_row_height).compute_layout(photos, container_width)
