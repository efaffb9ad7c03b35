"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the flow
totalizer: the BigFloat accumulator and its precision-preserving arithmetic.
They are independent of hardware drivers and clock sources.
"""
