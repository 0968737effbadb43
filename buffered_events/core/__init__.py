"""
Core

Buffer manager, subscription registry, maintenance and shared types.
"""
