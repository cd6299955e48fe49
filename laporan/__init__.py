"""
Laporan Triwulan App

Quarterly progress reports of program participants:
- Next eligible quarter (max 8 per cycle) and prefill from the prior report
- Report form validation and livestock balance derivation
- Report persistence and per-participant aggregates
"""
