"""
SJF scheduler CLI package.

Provides a non-preemptive Shortest-Job-First CPU scheduling simulator with a
command-line interface for building workloads and inspecting the resulting
schedule.
"""

__all__ = ["cli", "schedule_sjf"]

from .algorithms import schedule_sjf
