"""
Thin wrappers around the Lapack LU routines shipped with scipy.

Both routines work on a dense, column-major (Fortran-ordered) buffer of
plain numbers and return the Lapack status code `info`:
    - 0 : success
    - < 0 : argument number `-info` was bad
    - > 0 : `U[info-1, info-1]` is exactly zero, the matrix is singular
"""
import numpy as np
from scipy.linalg import lapack
from ..errors import SingularMatrixError, LapackArgumentError


# numpy dtypes that have a Lapack implementation (s, d, c, z)
lapack_dtypes = (np.float32, np.float64, np.complex64, np.complex128)


def check_info(routine, info):
    if info < 0:
        raise LapackArgumentError(routine, info)
    if info > 0:
        raise SingularMatrixError(routine, info)


def as_lapack_buffer(a):
    """Dense column-major copy of `a` with a Lapack-compatible dtype"""
    a = np.asarray(a)
    if a.dtype.type not in lapack_dtypes:
        a = a.astype(np.complex128 if np.iscomplexobj(a) else np.float64)
    return np.array(a, order='F', copy=True)


def getrf(a):
    """LU factorization with partial pivoting, in place.

    Parameters
    ----------
    a : (M, M) ndarray
        Column-major buffer, overwritten by the factors.

    Returns
    -------
    lu : (M, M) ndarray
    piv : (M,) ndarray[int]
    info : int

    """
    getrf, = lapack.get_lapack_funcs(('getrf',), (a,))
    lu, piv, info = getrf(a, overwrite_a=True)
    return lu, piv, info


def getri(lu, piv):
    """Inverse from an LU factorization, in place.

    The workspace has the minimum size allowed (the matrix dimension):
    matrices are small so there is no need for blocked inversion.

    Returns
    -------
    inv : (M, M) ndarray
    info : int

    """
    getri, = lapack.get_lapack_funcs(('getri',), (lu,))
    lwork = max(1, lu.shape[0])
    inv, info = getri(lu, piv, lwork=lwork, overwrite_lu=True)
    return inv, info


def inv(a):
    """Invert a square matrix with getrf + getri.

    Raises
    ------
    SingularMatrixError
        If either routine reports a zero pivot.
    LapackArgumentError
        If either routine rejects an argument.

    """
    buffer = as_lapack_buffer(a)
    lu, piv, info = getrf(buffer)
    check_info('getrf', info)
    out, info = getri(lu, piv)
    check_info('getri', info)
    return out
