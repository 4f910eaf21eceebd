"""Caching proxy implementation.

Provides the proxy that implements the VideoService interface on top of
another VideoService, plus the slot containers it stores results in.
Bounded Context: Cache Management
"""
