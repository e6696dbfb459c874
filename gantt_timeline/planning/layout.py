"""High level orchestration for building Gantt chart layouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Collection, Iterable, List, Optional, Tuple

import pandas as pd

from ..common.performance import measure_time
from ..core.config import CONFIG, GanttConfig, ViewMode
from ..domain.dates import resolve_today
from ..domain.exceptions import DomainError, TimelineError
from ..domain.hierarchy import walk_items
from ..domain.models import (
    KIND_TASK,
    ROW_COLUMNS,
    DateWindow,
    GanttLayout,
    LabelGrid,
    TimedItem,
)
from ..domain.normalization import normalize_items
from ..domain.validation import validate_view_mode
from .date_range import calculate_date_range
from .geometry import (
    calculate_bar_position,
    calculate_today_position,
    today_column_index,
)
from .labels import generate_date_labels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GanttContext:
    """Inputs that are not part of the item list.

    ``expanded`` holds the ids whose children are shown; ``None`` shows
    every level.
    """

    view_mode: str = ViewMode.AUTO.value
    today: Optional[pd.Timestamp] = None
    expanded: Optional[Collection[str]] = frozenset()

    def resolved_today(self) -> pd.Timestamp:
        return resolve_today(self.today)


class GanttLayoutBuilder:
    """Chains date window → label grid → per-row geometry."""

    def __init__(self, context: GanttContext, config: GanttConfig = CONFIG) -> None:
        self.context = context
        self.config = config

    def build(self, items: Optional[Iterable[Any]]) -> GanttLayout:
        view_mode = validate_view_mode(self.context.view_mode)
        # one "today" for every stage of this build
        today = self.context.resolved_today()
        tree = normalize_items(items)

        try:
            window = calculate_date_range(
                tree, view_mode, today=today, config=self.config.timeline
            )
            grid = generate_date_labels(
                window.min_date,
                window.max_date,
                window.total_days,
                view_mode,
                config=self.config.timeline,
            )
            today_position = calculate_today_position(
                window.min_date, grid.cell_width, grid.interval, today=today
            )
            today_column = today_column_index(
                window.min_date, grid.interval, today=today
            )
            rows = self._build_rows(tree, window, grid)
        except DomainError:
            raise
        except (TypeError, ValueError, AttributeError) as exc:
            logger.exception("Gantt layout build failed")
            raise TimelineError(f"타임라인 레이아웃을 만들 수 없습니다: {exc}") from exc

        logger.info(
            f"Gantt layout ({view_mode}): {len(tree)} top-level items, "
            f"{len(rows)} rows, {len(grid.labels)} cells, "
            f"window {window.min_date.date()} to {window.max_date.date()}"
        )
        return GanttLayout(
            view_mode=view_mode,
            today=today,
            window=window,
            grid=grid,
            today_position=today_position,
            today_column=today_column,
            rows=rows,
        )

    def _build_rows(
        self,
        tree: Tuple[TimedItem, ...],
        window: DateWindow,
        grid: LabelGrid,
    ) -> pd.DataFrame:
        expanded = self.context.expanded
        records: List[dict] = []

        for item, level in walk_items(tree, expanded=expanded):
            start = item.start
            # due-date-only tasks are drawn as a one-day bar on the due date
            if start is None and item.kind == KIND_TASK:
                start = item.end

            bar = calculate_bar_position(
                start,
                item.end,
                window.min_date,
                grid.cell_width,
                grid.interval,
                config=self.config.timeline,
            )
            records.append(
                {
                    "item_id": item.item_id,
                    "name": item.name,
                    "label": item.display_label,
                    "kind": item.kind,
                    "level": level,
                    "start": item.start,
                    "end": item.end,
                    "completed": item.completed,
                    "has_children": item.has_children,
                    "expanded": item.has_children
                    and (expanded is None or item.item_id in expanded),
                    "left": bar.left,
                    "width": bar.width,
                    "visible": bar.is_visible,
                }
            )

        return pd.DataFrame(records, columns=ROW_COLUMNS)


@measure_time
def build_gantt_layout(
    items: Optional[Iterable[Any]],
    view_mode: str = ViewMode.AUTO.value,
    *,
    today: Any = None,
    expanded: Optional[Collection[str]] = frozenset(),
) -> GanttLayout:
    """Return the full layout for ``items`` in ``view_mode``."""

    context = GanttContext(view_mode=view_mode, today=today, expanded=expanded)
    return GanttLayoutBuilder(context).build(items)
