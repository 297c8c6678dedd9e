"""
Core numeric primitives and value types.

This module contains the foundational building blocks that are independent
of any consuming layer (geometry, rendering, physics).
"""
