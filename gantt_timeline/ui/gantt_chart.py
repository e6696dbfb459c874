"""Gantt 타임라인 차트 렌더러.

레이아웃 엔진이 계산한 픽셀 좌표를 그대로 x축으로 사용해
Plotly Figure를 만들고 Streamlit에 표시합니다.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import pandas as pd
import streamlit as st

from ..core.config import CONFIG, DAILY_INTERVAL, UIConfig
from ..domain.models import GanttLayout
from ..planning.geometry import initial_scroll_left
from .colors import (
    BAR_OPACITY,
    BOUNDARY_COLOR,
    GRID_COLOR,
    HOVER_OPACITY,
    TODAY_COLOR,
    TODAY_COLUMN_COLOR,
    WEEKEND_FILL_COLOR,
    WEEKEND_GRID_COLOR,
    bar_color,
    bar_hover_color,
    to_rgba,
)
from .plotly_helpers import (
    column_rect,
    ensure_plotly_available,
    go,
    vertical_line,
    visible_x_range,
)

logger = logging.getLogger(__name__)

# 하위 항목 들여쓰기: 레벨당 NBSP 4개 (축 라벨에서 일반 공백은 사라짐)
NBSP = "\u00a0"
INDENT_PER_LEVEL = 4


def _format_date(value: Optional[pd.Timestamp]) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"{value.month_name()[:3]} {value.day}, {value.year}"


def _row_label(name: str, level: int) -> str:
    return NBSP * (INDENT_PER_LEVEL * int(level)) + str(name)


def _grid_shapes(layout: GanttLayout) -> List[dict]:
    grid = layout.grid
    shapes: List[dict] = []

    for label in grid.labels:
        x0 = label.index * grid.cell_width
        if grid.interval == DAILY_INTERVAL and label.is_weekend:
            shapes.append(column_rect(x0, x0 + grid.cell_width, WEEKEND_FILL_COLOR))
        color = WEEKEND_GRID_COLOR if label.is_weekend else GRID_COLOR
        shapes.append(vertical_line(x0, color))

    # 월/연도 경계선은 더 진하게
    for header in grid.headers.primary[1:]:
        shapes.append(vertical_line(header.left, BOUNDARY_COLOR))

    return shapes


def _today_shapes(layout: GanttLayout) -> List[dict]:
    """일 단위는 오늘 열을 강조하고, 그 외에는 얇은 세로선을 그린다."""
    grid = layout.grid
    if grid.interval == DAILY_INTERVAL:
        if 0 <= layout.today_column < len(grid.labels):
            x0 = layout.today_column * grid.cell_width
            return [column_rect(x0, x0 + grid.cell_width, TODAY_COLUMN_COLOR)]
        return []
    if layout.today_position > grid.total_width:
        return []
    return [vertical_line(layout.today_position, TODAY_COLOR, width=2)]


def _axis_ticks(layout: GanttLayout) -> tuple[list, list]:
    """셀 라벨(일/주) 또는 월 헤더(월 단위)를 x축 눈금으로 사용"""
    grid = layout.grid
    if grid.headers.secondary is not None:
        tickvals = [h.left + h.width / 2 for h in grid.headers.secondary]
        ticktext = [h.label for h in grid.headers.secondary]
    else:
        tickvals = [label.index * grid.cell_width + grid.cell_width / 2 for label in grid.labels]
        ticktext = [label.label for label in grid.labels]
    return tickvals, ticktext


def _header_annotations(layout: GanttLayout) -> List[dict]:
    return [
        dict(
            x=header.left + header.width / 2,
            y=1.0,
            xref="x",
            yref="paper",
            yanchor="bottom",
            yshift=28,
            text=f"<b>{header.label}</b>",
            showarrow=False,
            font=dict(size=13),
        )
        for header in layout.grid.headers.primary
    ]


def build_gantt_figure(
    layout: GanttLayout,
    *,
    viewport_width: Optional[int] = None,
    ui_config: UIConfig = CONFIG.ui,
) -> "go.Figure":
    """
    레이아웃으로부터 Gantt 차트 Figure를 생성합니다.

    - x축: 레이아웃 픽셀 좌표 (0 ~ total_width)
    - y축: 화면에 표시되는 행 (위에서 아래로)
    - 막대: 항목 종류/완료 여부 색상의 사각형
    - 오늘: 일 단위는 열 강조, 주/월 단위는 세로선
    - 초기 x 범위: 오늘 표시선이 화면 왼쪽 1/3 지점에 오도록 설정

    Args:
        layout: build_gantt_layout 결과
        viewport_width: 차트 영역 너비 (픽셀, None이면 설정값)
        ui_config: UI 설정

    Returns:
        Plotly Figure
    """
    viewport_width = viewport_width or ui_config.default_viewport_width
    rows = layout.rows.reset_index(drop=True)
    grid = layout.grid

    fig = go.Figure()
    shapes = _grid_shapes(layout)
    annotations = _header_annotations(layout)

    bar_half = ui_config.bar_height_ratio / 2
    hover_x: List[float] = []
    hover_y: List[int] = []
    hover_text: List[str] = []

    for position, row in rows.iterrows():
        if not row["visible"]:
            continue
        fill = bar_color(row["kind"], bool(row["completed"]))
        x0 = float(row["left"])
        x1 = x0 + float(row["width"])
        shapes.append(
            dict(
                type="rect",
                xref="x",
                yref="y",
                x0=x0,
                x1=x1,
                y0=position - bar_half,
                y1=position + bar_half,
                fillcolor=to_rgba(fill, BAR_OPACITY),
                line=dict(color=to_rgba(bar_hover_color(row["kind"]), HOVER_OPACITY), width=1),
                layer="above",
            )
        )
        if float(row["width"]) > ui_config.min_label_width:
            annotations.append(
                dict(
                    x=x0 + 8,
                    y=position,
                    xref="x",
                    yref="y",
                    xanchor="left",
                    text=str(row["label"]),
                    showarrow=False,
                    font=dict(color="white", size=11),
                )
            )
        hover_x.append((x0 + x1) / 2)
        hover_y.append(position)
        hover_text.append(
            f"{row['name']}<br>{_format_date(row['start'])} - {_format_date(row['end'])}"
        )

    shapes.extend(_today_shapes(layout))
    logger.debug(
        f"Gantt figure: {len(hover_x)} bars, {len(shapes)} shapes, "
        f"{len(annotations)} annotations"
    )

    # 도형에는 호버가 없으므로 막대 중앙에 투명 마커를 둔다
    fig.add_trace(
        go.Scatter(
            x=hover_x,
            y=hover_y,
            mode="markers",
            marker=dict(size=18, opacity=0),
            hovertext=hover_text,
            hoverinfo="text",
            showlegend=False,
        )
    )

    tickvals, ticktext = _axis_ticks(layout)
    scroll_left = initial_scroll_left(
        layout.today_position,
        viewport_width,
        name_column_width=0,
        viewport_fraction=ui_config.today_viewport_fraction,
    )
    x_range = visible_x_range(scroll_left, viewport_width, grid.total_width)

    fig.update_layout(
        shapes=shapes,
        annotations=annotations,
        height=ui_config.header_height + max(len(rows), 1) * ui_config.row_height,
        margin=dict(l=ui_config.name_column_width, r=20, t=ui_config.header_height, b=20),
        plot_bgcolor="white",
        dragmode="pan",
        xaxis=dict(
            side="top",
            range=list(x_range),
            tickvals=tickvals,
            ticktext=ticktext,
            showgrid=False,
            zeroline=False,
            fixedrange=False,
        ),
        yaxis=dict(
            tickvals=list(range(len(rows))),
            ticktext=[_row_label(n, lv) for n, lv in zip(rows["name"], rows["level"])],
            range=[len(rows) - 0.5, -0.5],
            showgrid=False,
            zeroline=False,
            fixedrange=True,
        ),
    )
    return fig


def render_gantt_chart(
    layout: GanttLayout,
    *,
    title: str = "Timeline",
    key: Optional[str] = None,
) -> None:
    """
    Gantt 차트를 Streamlit에 렌더링합니다.

    항목이 없으면 안내 메시지를 표시합니다.
    """
    if not ensure_plotly_available():
        return

    if layout is None or layout.is_empty:
        st.info("표시할 마일스톤이 없습니다. 마일스톤을 추가하면 타임라인에 표시됩니다.")
        return

    top_level = int((layout.rows["level"] == 0).sum())
    st.subheader(title)
    st.caption(
        f"{top_level}개 항목 · {layout.window.min_date.date()} ~ "
        f"{layout.window.max_date.date()} ({layout.window.total_days}일)"
    )

    fig = build_gantt_figure(layout)
    st.plotly_chart(fig, use_container_width=True, key=key)
