"""
Test suite for chunkdec

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/properties/    : Property-based tests (hypothesis)
"""
