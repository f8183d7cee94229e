"""Domain layer: models, rules and ports."""
