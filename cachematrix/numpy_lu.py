import numpy as np

from .errors import SingularMatrixError
from .options import DEFAULT_TOLERANCE


def lu_decomposition(A, tol=DEFAULT_TOLERANCE):
    n = A.shape[0]
    L = np.eye(n)
    U = np.array(A, dtype=np.float64, copy=True)
    P = np.eye(n)
    tol = max(tol, n * np.finfo(U.dtype).eps * (np.abs(U).max() if n else 0.0))
    for i in range(n):
        # Pivot selection
        max_row = np.argmax(np.abs(U[i:, i])) + i
        if abs(U[max_row, i]) <= tol:
            raise SingularMatrixError("Singular matrix")

        # Swap rows in U
        U[[i, max_row]] = U[[max_row, i]]
        P[[i, max_row]] = P[[max_row, i]]

        # Swap rows in L (only left part)
        if i > 0:
            L[[i, max_row], :i] = L[[max_row, i], :i]

        # Elimination below the pivot in one step
        factors = U[i+1:, i] / U[i, i]
        L[i+1:, i] = factors
        U[i+1:, i:] -= np.outer(factors, U[i, i:])
    return P, L, U


def invert_matrix(A, tol=DEFAULT_TOLERANCE):
    P, L, U = lu_decomposition(np.asarray(A), tol)

    # Solve PA = LU → A⁻¹ = U⁻¹ L⁻¹ P
    Y = np.linalg.solve(L, P)
    X = np.linalg.solve(U, Y)

    return X
