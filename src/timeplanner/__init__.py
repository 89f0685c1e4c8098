"""
Timeplanner - Time Allocation and Timeline Conflict Engine

This package contains the scheduling core behind the project timeline:
- scheduling: day estimates, recurrence expansion, overlap detection,
  slot search and drag conflict resolution (pure functions)
- api: FastAPI endpoints exposing the scheduling core
- platform: Cross-cutting concerns (configuration, logging)
"""

__version__ = "0.1.0"
