"""Core metric domain: models, coercion rules and the Metric container."""
