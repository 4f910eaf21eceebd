"""Domain models (value objects and simple entities)."""
