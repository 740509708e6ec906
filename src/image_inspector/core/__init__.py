# ABOUTME: Orchestration layer for inspection runs
# ABOUTME: Seed iteration, throttling, result collection and report files

"""
Core Layer: Inspection run orchestration

This layer handles:
- Iterating seed ids and verifying each one
- Collecting verdicts and failing ids
- Reading seed files and writing the broken-id report

Data Flow: Seed file → Verdict per seed → Broken-id report
"""

from .driver import InspectionReport, VerificationDriver
from .files import SeedFileError, load_seed_ids, write_broken_report

__all__ = [
    "InspectionReport",
    "SeedFileError",
    "VerificationDriver",
    "load_seed_ids",
    "write_broken_report",
]
