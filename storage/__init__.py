"""
Storage Module

Persistence of drawing analysis reports.
"""

from .analysis_repository import AnalysisRepository, InMemoryAnalysisRepository

__all__ = [
    'AnalysisRepository',
    'InMemoryAnalysisRepository'
]
