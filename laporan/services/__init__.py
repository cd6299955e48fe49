"""
Laporan Services

Eligibility, form logic, persistence and aggregates of quarterly reports.
"""

from .laporan_store import LaporanStore

__all__ = [
    'LaporanStore',
]
