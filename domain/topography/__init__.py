"""Topography Bounded Context.

Responsible for turning resource points into a care topography:
- Value Objects: GeoWindow, RasterWindow, ScalarGrid, Contour, ProcessingStatistics
- Configuration: EngineConfig
- Services: generate_field, extract_contours, to_geographic, to_raster
- Ports: ProcessingObserver
"""
