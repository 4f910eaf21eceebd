"""Infrastructure Layer: Contains concrete implementations and adapters.

Implements the interfaces defined in the domain layer: the simulated video
backend, the caching proxy, configuration, logging and the console UI.
"""
