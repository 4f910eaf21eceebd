"""Domain Event definitions.

Represents significant occurrences within the domain (cache hits, misses,
delegate calls) that observability sinks can react to.
"""
