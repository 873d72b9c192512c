"""Utility package: geometry, priority queue, logging and file loading helpers."""
