# src/interactivechart/ui/__init__.py
"""The PySide6 user interface."""
