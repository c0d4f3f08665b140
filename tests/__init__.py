"""
Test suite for units-calculus

Contains:
- tests/unit/          : Unit tests for individual modules
"""
