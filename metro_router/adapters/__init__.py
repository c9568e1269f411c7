"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the query core to the outside world:
- Graph storage (timetable text, CSV files)
- Rendering (plain-text riding guides)
"""
