"""Core data structures."""

from .priority_queue import PriorityQueue

__all__ = [
    "PriorityQueue",
]
