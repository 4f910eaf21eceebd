"""Domain Layer: value objects, events, errors and ports (interfaces)."""
