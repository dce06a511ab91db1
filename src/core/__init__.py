"""
Core domain models, decimal arithmetic primitives, and invariants.

This module contains the foundational building blocks: the Operation value
object, range-checked decimal arithmetic, and JSON contracts.
"""
