from typing import Any

import numpy as np
import pyqtgraph as pg
from loguru import logger
from PySide6.QtCore import QPointF, Qt
from PySide6.QtWidgets import QGridLayout, QWidget

from interactivechart.config import ChartSettings, DragSettings
from interactivechart.models import Coordinate
from interactivechart.series import DraggablePointSeries, SeriesEvent, SeriesEventKind
from interactivechart.utils.interpolation import catmull_rom
from interactivechart.utils.ticks import tick_values
from interactivechart.utils.time import format_tick

pg.setConfigOptions(antialias=True, useOpenGL=False)
pg.setConfigOption("background", "w")
pg.setConfigOption("foreground", "k")

DRAGGED_BRUSH = pg.mkBrush(255, 0, 0)
IDLE_BRUSH = pg.mkBrush(0, 0, 255, 128)
LINE_PEN = pg.mkPen("#1F4E9C", width=2)
PLOT_BACKGROUND = (255, 192, 203, 15)
PLOT_BORDER = pg.mkPen("b", width=2)


class DateAxis(pg.AxisItem):
    """A custom axis item to display POSIX timestamps as dates and times."""

    def tickStrings(  # noqa: N802
        self, values: list[float], _scale: float, _spacing: float
    ) -> list[str]:
        """Formats the tick values from Unix timestamps to readable strings."""
        if not values:
            return []
        span = values[-1] - values[0]
        return [format_tick(v, span) for v in values]


class DragViewBox(pg.ViewBox):
    """A ViewBox that turns left-button drags into series drag calls.

    A drag that starts on a point moves it until the button is released.
    A drag that starts on empty space pans the view, unless
    `pick_up_on_move` is set, in which case every move retries the hit test
    until a point is grabbed.
    """

    def __init__(
        self,
        series: DraggablePointSeries,
        pick_up_on_move: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._series = series
        self.pick_up_on_move = pick_up_on_move
        self._gesture_active = False

    def data_coordinate(self, scene_pos: QPointF) -> Coordinate:
        """Maps a scene position into data space."""
        pos_v = self.mapSceneToView(scene_pos)
        return Coordinate(float(pos_v.x()), float(pos_v.y()))

    def mouseDragEvent(self, ev: Any, axis: int | None = None) -> None:  # noqa: N802
        """Drags the grabbed point, or falls back to panning."""
        if axis is not None or ev.button() != Qt.MouseButton.LeftButton:
            super().mouseDragEvent(ev, axis=axis)
            return

        if ev.isStart():
            self._series.begin_drag(self.data_coordinate(ev.buttonDownScenePos()))
            self._gesture_active = (
                self._series.dragged_point is not None or self.pick_up_on_move
            )

        if not self._gesture_active:
            super().mouseDragEvent(ev, axis=axis)
            return

        ev.accept()
        target = self.data_coordinate(ev.scenePos())
        if self._series.dragged_point is not None:
            self._series.update_drag(target)
        else:
            self._series.begin_drag(target)

        if ev.isFinish():
            self._series.end_drag()
            self._gesture_active = False


class ChartView(QWidget):
    """A line chart whose points can be dragged with the mouse.

    The view never edits points itself; it forwards gestures to the series
    through `DragViewBox` and redraws from `DraggablePointSeries.snapshot`
    whenever the series reports a change.
    """

    def __init__(
        self,
        series: DraggablePointSeries,
        chart_settings: ChartSettings | None = None,
        drag_settings: DragSettings | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._chart_settings = chart_settings or ChartSettings()
        self._drag_settings = drag_settings or DragSettings()
        self._series = series
        self._subscription_id = series.subscribe(self._on_series_event)

        self._setup_ui()
        self.reload()

    @property
    def is_timed(self) -> bool:
        return self._chart_settings.dataset.lower() == "timed"

    def _setup_ui(self) -> None:
        """Initializes the plot widget and layout."""
        layout = QGridLayout(self)
        layout.setContentsMargins(15, 15, 15, 15)
        layout.setSpacing(0)

        self._view_box = DragViewBox(
            self._series,
            pick_up_on_move=self._drag_settings.pick_up_on_move,
            border=PLOT_BORDER,
        )
        self._view_box.setBackgroundColor(PLOT_BACKGROUND)

        axis_items = {"bottom": DateAxis(orientation="bottom")} if self.is_timed else None
        self._plot = pg.PlotWidget(viewBox=self._view_box, axisItems=axis_items)
        self._plot.showGrid(x=True, y=True, alpha=0.3)
        self._plot.setMenuEnabled(False)
        if self.is_timed:
            self._plot.setLabel("left", "Temperature")
            self._plot.setLabel("bottom", "Time")
        else:
            self._plot.setLabel("left", "Y")
            self._plot.setLabel("bottom", "X")

        self._line_item = pg.PlotDataItem(pen=LINE_PEN)
        self._plot.addItem(self._line_item)

        self._marker_item = pg.ScatterPlotItem(
            size=self._chart_settings.marker_size, pen=None, symbol="o"
        )
        self._plot.addItem(self._marker_item)

        layout.addWidget(self._plot, 0, 0)

    def set_pick_up_on_move(self, enabled: bool) -> None:
        self._view_box.pick_up_on_move = enabled

    def reload(self) -> None:
        """Redraws everything and refits the axes to the current data."""
        self._redraw()
        self._update_left_ticks()
        self._view_box.enableAutoRange()
        self._view_box.autoRange(padding=0.1)
        # Keep the axes still while points are being dragged.
        self._view_box.disableAutoRange()

    def _update_left_ticks(self) -> None:
        secondaries = [p.secondary for p in self._series]
        step = self._chart_settings.axis_step
        values = tick_values(secondaries, step)
        left_axis = self._plot.getAxis("left")
        if values:
            left_axis.setTicks([[(v, f"{v:g}") for v in values]])
        else:
            left_axis.setTicks(None)
        logger.debug(f"Left axis uses {len(values)} labels at step {step}.")

    def _redraw(self) -> None:
        rows = self._series.snapshot()
        xs = np.array([r.primary for r in rows], dtype=float)
        ys = np.array([r.secondary for r in rows], dtype=float)

        if self._chart_settings.smooth_line:
            line_x, line_y = catmull_rom(xs, ys)
        else:
            line_x, line_y = xs, ys
        self._line_item.setData(x=line_x, y=line_y)

        self._marker_item.setData(
            x=xs,
            y=ys,
            brush=[DRAGGED_BRUSH if r.dragged else IDLE_BRUSH for r in rows],
            data=[r.id for r in rows],
        )

    def _on_series_event(self, event: SeriesEvent) -> None:
        if event.kind is SeriesEventKind.RESET:
            self.reload()
        else:
            self._redraw()

    def detach(self) -> None:
        """Stops listening to the series."""
        if self._subscription_id is not None:
            self._series.unsubscribe(self._subscription_id)
            self._subscription_id = None
