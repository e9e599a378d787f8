"""
Test suite for the line-item pricing engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
