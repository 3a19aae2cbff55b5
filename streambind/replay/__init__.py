"""
Replay of captured message sequences.

Replay folds raw messages into a collection with the same routing and
reducers a live client uses. Same messages -> same collection.
"""

from .runner import ReplayResult, replay

__all__ = [
    "ReplayResult",
    "replay",
]
