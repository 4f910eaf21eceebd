"""Simulated upstream video backend and its catalog."""
