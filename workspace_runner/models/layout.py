"""Grid layout models."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GridConfiguration:
    """Column count and description derived from the number of apps.

    Never stored: always recomputed with ``for_app_count``.
    """

    app_count: int
    columns: int
    description: str

    @classmethod
    def for_app_count(cls, app_count: int) -> "GridConfiguration":
        """Look up the fixed column table.

        Raises:
            ValueError: If app_count < 1
        """
        if app_count < 1:
            raise ValueError(f"Grid needs at least one app, got {app_count}")

        if app_count == 1:
            return cls(app_count, 1, "Single window")
        if app_count == 2:
            return cls(app_count, 2, "Side by side")
        if app_count == 3:
            return cls(app_count, 3, "Three columns")
        if app_count == 4:
            return cls(app_count, 2, "2x2 grid")
        if app_count <= 6:
            return cls(app_count, 3, "3x2 grid")
        if app_count <= 9:
            return cls(app_count, 3, "3x3 grid")
        if app_count <= 12:
            return cls(app_count, 4, "4x3 grid")
        return cls(app_count, 4, "4-column grid")


@dataclass(frozen=True)
class GridPlacement:
    """Cell-space placement of one app: top-left cell plus span."""

    col: int
    row: int
    col_span: int
    row_span: int

    @property
    def bottom(self) -> int:
        """Exclusive row index below this placement."""
        return self.row + self.row_span

    def cells(self) -> Tuple[Tuple[int, int], ...]:
        """All (col, row) unit cells covered by this placement."""
        return tuple(
            (c, r)
            for r in range(self.row, self.row + self.row_span)
            for c in range(self.col, self.col + self.col_span)
        )
