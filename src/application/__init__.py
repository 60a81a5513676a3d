"""Application services that orchestrate the topography domain.

Pipeline exported for simplified imports.
"""

from .pipeline import ContourPipeline, ProcessingResult

__all__ = ["ContourPipeline", "ProcessingResult"]
