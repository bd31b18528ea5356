import os

# Qt widgets are created in the integration tests; never open real windows.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
