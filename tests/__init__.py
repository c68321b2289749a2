"""
Test suite for skala-numerics

Contains:
- tests/unit/          : Unit tests for the scalar, vectors and helpers
"""
