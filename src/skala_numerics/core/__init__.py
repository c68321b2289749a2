"""
Core numeric types, arithmetic primitives, and invariants.

This module contains the deterministic building blocks that are independent
of the engine (rendering, physics, scene graph, etc.).
"""
