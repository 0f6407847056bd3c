import numpy as np


def placeholder_matrix():
    return np.full((1, 1), np.nan)


class CachedMatrixHolder:
    """
    Holds one matrix together with the cached inverse computed from it.

    Replacing the matrix drops the cached inverse, so a cached value is only
    ever the inverse of the matrix currently held. The inverse itself is
    filled in by resolve_inverse.

    Not safe to share between threads without external locking.
    """

    def __init__(self, matrix=None):
        self._matrix = placeholder_matrix() if matrix is None else matrix
        self._cached_inverse = None

    def set_matrix(self, new_matrix):
        self._matrix = new_matrix
        self._cached_inverse = None

    def get_matrix(self):
        return self._matrix

    def set_cached_inverse(self, inverse):
        self._cached_inverse = inverse

    def get_cached_inverse(self):
        """Cached inverse, or None when nothing is cached."""
        return self._cached_inverse

    def has_cached_inverse(self) -> bool:
        return self._cached_inverse is not None

    def __repr__(self):
        shape = getattr(self._matrix, "shape", None)
        if shape is None:
            shape = np.shape(self._matrix)
        return f"CachedMatrixHolder(shape={tuple(shape)}, cached={self.has_cached_inverse()})"
