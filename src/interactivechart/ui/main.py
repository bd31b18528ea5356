import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger
from PySide6.QtCore import Slot
from PySide6.QtGui import QAction, QActionGroup, QCloseEvent
from PySide6.QtWidgets import QApplication, QMainWindow, QStatusBar

from interactivechart.config import Settings
from interactivechart.datasets import load_dataset, primary_scale
from interactivechart.hit_test import HIT_TEST_NAMES, hit_test_from_settings
from interactivechart.logging_config import setup_logging
from interactivechart.series import DraggablePointSeries, SeriesEvent, SeriesEventKind
from interactivechart.ui.views.chart_view import ChartView

READY_MESSAGE = "Drag a point to move it."


class MainWindow(QMainWindow):
    """The main application window."""

    def __init__(self, app_settings: Settings) -> None:
        super().__init__()
        self._settings = app_settings
        self._primary_scale = primary_scale(app_settings.chart.dataset)

        # --- Initialize Core Components ---
        self._series = DraggablePointSeries(
            load_dataset(app_settings.chart.dataset),
            hit_test=hit_test_from_settings(app_settings.drag, self._primary_scale),
        )
        self._subscription_id: int | None = self._series.subscribe(
            self._on_series_event
        )

        self._setup_ui()

    @property
    def series(self) -> DraggablePointSeries:
        return self._series

    def _setup_ui(self) -> None:
        """Sets up the window, menus, and central widget."""
        self.setWindowTitle("Interactive Chart")
        self.resize(900, 600)

        self._chart_view = ChartView(
            self._series, self._settings.chart, self._settings.drag, self
        )
        self.setCentralWidget(self._chart_view)

        self.setStatusBar(QStatusBar(self))
        self.statusBar().showMessage(READY_MESSAGE)

        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("&File")

        reset_action = QAction("&Reset Points", self)
        reset_action.triggered.connect(self._reset_points)
        file_menu.addAction(reset_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        hit_test_menu = menu_bar.addMenu("&Hit Test")
        self._hit_test_group = QActionGroup(self)
        self._hit_test_group.setExclusive(True)
        for name in HIT_TEST_NAMES:
            action = QAction(name.capitalize(), self, checkable=True)
            action.setData(name)
            action.setChecked(name == self._settings.drag.hit_test.lower())
            self._hit_test_group.addAction(action)
            hit_test_menu.addAction(action)
        self._hit_test_group.triggered.connect(self._on_hit_test_selected)

        hit_test_menu.addSeparator()
        pick_up_action = QAction("&Pick Up While Moving", self, checkable=True)
        pick_up_action.setChecked(self._settings.drag.pick_up_on_move)
        pick_up_action.toggled.connect(self._chart_view.set_pick_up_on_move)
        hit_test_menu.addAction(pick_up_action)

    def _format_primary(self, value: float) -> str:
        if self._chart_view.is_timed:
            return datetime.fromtimestamp(value, tz=timezone.utc).strftime(
                "%Y-%m-%d %H:%M"
            )
        return f"{value:.1f}"

    def _on_series_event(self, event: SeriesEvent) -> None:
        if event.kind is SeriesEventKind.DRAG_ENDED or event.point is None:
            self.statusBar().showMessage(READY_MESSAGE)
            return
        point = event.point
        self.statusBar().showMessage(
            f"Dragging: {self._format_primary(point.primary)}, {point.secondary:.1f}"
        )

    @Slot()
    def _reset_points(self) -> None:
        """Restores the seed dataset."""
        self._series.reset(load_dataset(self._settings.chart.dataset))

    @Slot(QAction)
    def _on_hit_test_selected(self, action: QAction) -> None:
        name = action.data()
        drag_settings = replace(self._settings.drag, hit_test=name)
        self._series.hit_test = hit_test_from_settings(
            drag_settings, self._primary_scale
        )
        logger.info(f"Hit test switched to '{name}'.")
        self.statusBar().showMessage(f"Hit test: {name}", 3000)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """Releases any active drag before the window closes."""
        logger.info("Close event triggered.")
        self._series.end_drag()
        if self._subscription_id is not None:
            self._series.unsubscribe(self._subscription_id)
            self._subscription_id = None
        self._chart_view.detach()
        event.accept()


def main() -> None:
    """The synchronous entry point for the application."""
    try:
        app_settings = Settings.get_instance()
        log_dir = (
            Path(app_settings.general.log_directory)
            if app_settings.general.log_directory
            else None
        )
        setup_logging(
            console_level=app_settings.general.log_level_console,
            file_level=app_settings.general.log_level_file,
            log_dir=log_dir,
        )

        app = QApplication.instance() or QApplication(sys.argv)
        main_window = MainWindow(app_settings)
        main_window.show()
        logger.info("Starting the Qt application event loop.")
        exit_code = app.exec()
        logger.info("Qt application event loop has finished.")
        sys.exit(exit_code)
    except Exception:
        logger.exception("An unhandled exception reached the top-level entry point.")
        sys.exit(1)


if __name__ == "__main__":
    main()
