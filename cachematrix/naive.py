# Pure Python LU and Gauss-Jordan inversion on nested lists

import sys

from .errors import SingularMatrixError
from .options import DEFAULT_TOLERANCE


def identity(n):
    return [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]


def singular_threshold(A, tol=DEFAULT_TOLERANCE):
    # Rounding residue grows with size and magnitude
    scale = max((abs(x) for row in A for x in row), default=0.0)
    return max(tol, len(A) * sys.float_info.epsilon * scale)


def lu_decomposition(A, tol=DEFAULT_TOLERANCE):
    n = len(A)
    tol = singular_threshold(A, tol)
    L = identity(n)
    U = [[float(x) for x in row] for row in A]
    P = identity(n)

    for i in range(n):
        # Pivot selection
        max_row = max(range(i, n), key=lambda r: abs(U[r][i]))
        if abs(U[max_row][i]) <= tol:
            raise SingularMatrixError("Singular matrix")

        # Swap rows in U
        U[i], U[max_row] = U[max_row], U[i]
        P[i], P[max_row] = P[max_row], P[i]

        # Swap rows in L (only left part)
        if i > 0:
            L[i][:i], L[max_row][:i] = L[max_row][:i], L[i][:i]

        # Elimination
        for j in range(i+1, n):
            factor = U[j][i] / U[i][i]
            L[j][i] = factor
            for k in range(i, n):
                U[j][k] -= factor * U[i][k]

    return P, L, U


def forward_substitution(L, b):
    n = len(L)
    y = [0.0]*n
    for i in range(n):
        y[i] = b[i] - sum(L[i][j]*y[j] for j in range(i))
    return y


def backward_substitution(U, y, tol=DEFAULT_TOLERANCE):
    n = len(U)
    x = [0.0]*n
    for i in reversed(range(n)):
        if abs(U[i][i]) <= tol:
            raise SingularMatrixError("Zero pivot in U")
        x[i] = (y[i] - sum(U[i][j]*x[j] for j in range(i+1, n))) / U[i][i]
    return x


def lu_invert(A, tol=DEFAULT_TOLERANCE):
    n = len(A)
    P, L, U = lu_decomposition(A, tol)
    A_inv = [[0.0]*n for _ in range(n)]

    # Column col of P is P @ e_col
    for col in range(n):
        e = [P[row][col] for row in range(n)]
        y = forward_substitution(L, e)
        x = backward_substitution(U, y, tol)
        for row in range(n):
            A_inv[row][col] = x[row]

    return A_inv


def gauss_jordan_invert(A, tol=DEFAULT_TOLERANCE):
    n = len(A)
    tol = singular_threshold(A, tol)
    I = identity(n)
    M = [[float(x) for x in A[i]] + I[i] for i in range(n)]

    for i in range(n):
        max_row = max(range(i, n), key=lambda r: abs(M[r][i]))
        if abs(M[max_row][i]) <= tol:
            raise SingularMatrixError("Zero pivot encountered")
        M[i], M[max_row] = M[max_row], M[i]

        # Normalize row
        pivot = M[i][i]
        for j in range(2*n):
            M[i][j] /= pivot

        # Eliminate column
        for k in range(n):
            if k != i:
                factor = M[k][i]
                for j in range(2*n):
                    M[k][j] -= factor * M[i][j]

    # Extract inverse
    return [row[n:] for row in M]
