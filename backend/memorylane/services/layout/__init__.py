"""Layout service module.

Dynamic-programming planner for justified photo rows.
"""

from .service import (
    DEFAULT_TARGET_ROW_HEIGHT,
    RowLayoutPlanner,
    compute_layout,
)

__all__ = [
    "DEFAULT_TARGET_ROW_HEIGHT",
    "RowLayoutPlanner",
    "compute_layout",
]
