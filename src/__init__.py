"""Application Layer.

Infrastructure and application services that orchestrate domain logic.
This layer handles I/O (saved payloads, configuration files, logging) and
coordinates domain operations.
"""
