"""Domain layer: batch queries, provider outcomes and combined results."""
