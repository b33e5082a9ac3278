"""
Grid Layout Planner

Computes one screen rectangle per workspace app from abstract size hints.
Pure and deterministic: same apps and area in, same rectangles out.

Algorithm phases:
1. Pick the column count from the GridConfiguration table
2. First-fit each span into a (col, row) occupancy grid in row-major order
3. Fall back to a fresh row (span clamped to the grid) when nothing fits
4. Derive cell size from the number of rows used
5. Map cells to screen coordinates (bottom-up y), inset by padding and
   clamp to the minimum window size

First-fit without backtracking is not bin-optimal; placements are never
rotated or shrunk (except the clamp in phase 3).
"""

import logging
from typing import Iterable, List, Sequence, Set, Tuple, Union

from ..config import RunnerConfig
from ..constants import GridLimits
from ..models.geometry import ScreenRect
from ..models.layout import GridConfiguration, GridPlacement
from ..models.workspace import SizeClass, WorkspaceApp

logger = logging.getLogger(__name__)

PlannerInput = Union[WorkspaceApp, Tuple[str, Union[SizeClass, str]]]


class GridLayoutPlanner:
    """First-fit grid tiler for workspace windows."""

    def __init__(
        self,
        padding: float = GridLimits.PADDING,
        min_width: float = GridLimits.MIN_WINDOW_WIDTH,
        min_height: float = GridLimits.MIN_WINDOW_HEIGHT,
        max_scan_rows: int = GridLimits.MAX_SCAN_ROWS,
    ):
        """
        Initialize grid planner.

        Args:
            padding: Inset applied to every side of each cell rectangle
            min_width: Minimum emitted window width
            min_height: Minimum emitted window height
            max_scan_rows: Rows scanned past the cursor before falling back
        """
        if max_scan_rows < 1:
            raise ValueError("max_scan_rows must be at least 1")

        self.padding = padding
        self.min_width = min_width
        self.min_height = min_height
        self.max_scan_rows = max_scan_rows

    @classmethod
    def from_config(cls, config: RunnerConfig) -> "GridLayoutPlanner":
        return cls(
            padding=config.padding,
            min_width=config.min_window_width,
            min_height=config.min_window_height,
            max_scan_rows=config.max_scan_rows,
        )

    def plan(self, apps: Sequence[PlannerInput], area: ScreenRect) -> List[ScreenRect]:
        """
        Compute window rectangles for apps, in input order.

        Args:
            apps: WorkspaceApp objects or (id, size_class) pairs
            area: Usable screen area

        Returns:
            One ScreenRect per app (empty list for no apps)
        """
        if not apps:
            return []

        spans = [self._span_for(app) for app in apps]
        grid = GridConfiguration.for_app_count(len(spans))

        placements = self.place(spans, grid.columns)
        total_rows = max(max(p.bottom for p in placements), 1)

        logger.debug(
            f"Grid for {len(spans)} app(s): {grid.description}, "
            f"{grid.columns} column(s) x {total_rows} row(s)"
        )

        return [
            self._to_screen(p, area, grid.columns, total_rows)
            for p in placements
        ]

    def place(self, spans: Iterable[Tuple[int, int]], columns: int) -> List[GridPlacement]:
        """
        First-fit spans into a grid with the given column count.

        Args:
            spans: (col_span, row_span) per app, in order
            columns: Grid width in cells

        Returns:
            One GridPlacement per span
        """
        occupied: Set[Tuple[int, int]] = set()
        current_row = 0
        max_row = 0
        placements: List[GridPlacement] = []

        for col_span, row_span in spans:
            placement = self._first_fit(occupied, current_row, columns, col_span, row_span)

            if placement is None:
                # Span wider than the grid: new row below everything, clamped
                clamped = min(col_span, columns)
                placement = GridPlacement(col=0, row=max_row, col_span=clamped, row_span=row_span)
                if clamped != col_span:
                    logger.debug(
                        f"Span {col_span}x{row_span} exceeds {columns} column(s); "
                        f"clamped to {clamped} at row {max_row}"
                    )

            occupied.update(placement.cells())
            max_row = max(max_row, placement.bottom)
            placements.append(placement)

            # Skip rows that are completely full
            while all((c, current_row) in occupied for c in range(columns)):
                current_row += 1

        return placements

    def _first_fit(
        self,
        occupied: Set[Tuple[int, int]],
        current_row: int,
        columns: int,
        col_span: int,
        row_span: int,
    ):
        for row in range(current_row, current_row + self.max_scan_rows):
            for col in range(0, columns - col_span + 1):
                candidate = GridPlacement(col=col, row=row, col_span=col_span, row_span=row_span)
                if not any(cell in occupied for cell in candidate.cells()):
                    return candidate
        return None

    def _to_screen(
        self,
        placement: GridPlacement,
        area: ScreenRect,
        columns: int,
        total_rows: int,
    ) -> ScreenRect:
        cell_width = area.width / columns
        cell_height = area.height / total_rows

        x = area.min_x + placement.col * cell_width
        # Row 0 is the topmost visual row; y grows upward
        y = area.min_y + area.height - placement.bottom * cell_height

        return ScreenRect(
            x=x + self.padding,
            y=y + self.padding,
            width=max(placement.col_span * cell_width - 2 * self.padding, self.min_width),
            height=max(placement.row_span * cell_height - 2 * self.padding, self.min_height),
        )

    @staticmethod
    def _span_for(app: PlannerInput) -> Tuple[int, int]:
        if isinstance(app, WorkspaceApp):
            return app.size_class.span
        _, size_class = app
        return SizeClass(size_class).span
