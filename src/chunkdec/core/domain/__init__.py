"""
Domain value types.

Contains the ChunkDecimal number type.
"""

from chunkdec.core.domain.number import ChunkDecimal

__all__ = [
    "ChunkDecimal",
]
