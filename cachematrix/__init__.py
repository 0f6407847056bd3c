"""
Memoized matrix inversion.

Usage, assuming `m` is an invertible matrix:

    holder = CachedMatrixHolder(m)
    inv = resolve_inverse(holder)   # computed and cached
    inv = resolve_inverse(holder)   # served from the cache

Keep the holder around to benefit from the cache;
`resolve_inverse(CachedMatrixHolder(m))` recomputes every time.
"""

from .errors import InvalidShapeError, InversionError, SingularMatrixError
from .holder import CachedMatrixHolder
from .inverse import invert
from .options import InversionOptions
from .resolver import resolve_inverse

__all__ = [
    "CachedMatrixHolder",
    "InvalidShapeError",
    "InversionError",
    "InversionOptions",
    "SingularMatrixError",
    "invert",
    "resolve_inverse",
]
