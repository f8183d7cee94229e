"""Infrastructure layer: provider clients, cache and persistence."""
