"""
Test suite for flow-totalizer

Contains:
- tests/unit/          : Unit tests for individual modules
"""
