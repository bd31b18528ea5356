# src/interactivechart/__init__.py
"""InteractiveChart: a line chart whose data points can be dragged with the mouse.

The core is `DraggablePointSeries`, which owns the points, resolves which one
a drag gesture grabs, and moves it. Everything under `ui` is a pyqtgraph and
PySide6 rendering surface that feeds pointer positions to the series and
redraws from its snapshots.

Key sub-packages:
- `ui`: The PySide6 main window and chart view.
- `utils`: Tick, time-label and curve-sampling helpers used by the view.
"""

import importlib.metadata

try:
    __version__: str = importlib.metadata.version("interactivechart")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout that has not been installed.
    __version__ = "0.0.0-dev"
