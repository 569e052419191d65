"""Workout plans, live training sessions and progress tracking API."""

__version__ = "0.1.0"
