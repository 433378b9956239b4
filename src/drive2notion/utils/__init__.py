from .chunk import chunk_blocks
from .redact import redact

__all__ = [
    "chunk_blocks",
    "redact",
]
