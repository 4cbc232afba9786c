"""Application layer: ports and use cases driving the accounting engine."""
