# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, rate limiting, console tables

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and progress tracking
- Rate limiting between seed identifiers
- Rich table helpers for console output

Data Flow: Supporting services for all other layers
"""

from . import logging

__all__ = [
    "logging",
]
