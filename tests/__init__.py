"""
Test suite for vecprim

Contains:
- tests/unit/          : Unit tests for scalar arithmetic, casts and vector types
"""
