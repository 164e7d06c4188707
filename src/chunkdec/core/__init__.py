"""
Core number representation, arithmetic engine, formatting and configuration.

This module contains the building blocks of chunkdec; it has no
dependencies outside the package except pydantic for configuration.
"""
