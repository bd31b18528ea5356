# src/interactivechart/utils/__init__.py
"""Presentation helpers shared by the chart view: ticks, time labels and curves."""
