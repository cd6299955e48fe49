"""
Peternak Services

Data-access layer for program participants.
"""

from .peternak_store import PeternakStore

__all__ = [
    'PeternakStore',
]
