"""Infrastructure layer: adapters that perform I/O for the domain."""
