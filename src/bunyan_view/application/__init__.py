"""Application layer: ports and the record formatting use case."""
