"""Application layer: ports and use cases for resolving, rendering, and emitting."""
