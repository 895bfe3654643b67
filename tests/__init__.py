"""
Test suite for rationals

Contains:
- tests/unit/          : Unit tests for individual modules
"""
