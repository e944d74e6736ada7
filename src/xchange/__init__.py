# src/xchange/__init__.py
"""
XChange - Currency Conversion Core

The data/state engine behind a currency converter: cached exchange rates
and currency catalog, a debounced conversion pipeline, persisted history
and favorite pairs, and network reachability tracking.
"""

__version__ = "1.0.0"
