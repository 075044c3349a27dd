"""
## Overview
Products with Hermitian matrices stored in a compact way (`SymMat`):
only the diagonal and the upper triangle are stored, that is
$N(N+1)/2$ values instead of $N^2$.

The compact flattened matrix contains the diagonal of the matrix first,
followed by the rows of the upper triangle, i.e.:

    [ a d e ]
    [ . b f ]   =>  [a b c d e f]
    [ . . c ]

The lower triangle is the conjugate of the upper triangle. Products
never expand the matrix: sizes up to 3 use unrolled closed forms and
larger sizes use a double loop over the stored triangle.

---
"""
__all__ = ['sym_matvec', 'row_symmat']
from .elements import promote
from .shapes import Vec, Row, SymMat
from .errors import ShapeMismatchError
from ._impl import sym as _sym


def _split(mat, dtype):
    n = mat.size
    value = mat.value.to(dtype)
    diag = value[:n]
    uppr = value[n:]
    lowr = uppr.conj().resolve_conj() if uppr.is_complex() else uppr
    return diag, uppr, lowr


def sym_matvec(mat: SymMat, vec: Vec) -> Vec:
    r"""Matrix-vector product with a compact Hermitian matrix

    Parameters
    ----------
    mat : `SymMat(N)`
        Hermitian matrix.
    vec : `Vec(N)`
        Column vector.

    Returns
    -------
    matvec : `Vec(N)`
        Matrix-vector product.

    """
    if not isinstance(mat, SymMat) or not isinstance(vec, Vec):
        raise TypeError('sym_matvec expects a SymMat and a Vec')
    if vec.is_composite:
        raise TypeError('sym_matvec: composite elements are not supported')
    nb_prm = mat.size
    if len(vec) != nb_prm:
        raise ShapeMismatchError('sym_matvec', mat.shape, vec.shape)
    dtype = promote(mat, vec).dtype
    diag, uppr, lowr = _split(mat, dtype)
    vec = vec.value.to(dtype)
    if nb_prm == 1:
        mv = _sym.sym_matvec1(diag, uppr, lowr, vec)
    elif nb_prm == 2:
        mv = _sym.sym_matvec2(diag, uppr, lowr, vec)
    elif nb_prm == 3:
        mv = _sym.sym_matvec3(diag, uppr, lowr, vec)
    else:
        mv = _sym.sym_matvecn(diag, uppr, lowr, vec)
    return Vec._from_raw(mv)


def row_symmat(row: Row, mat: SymMat) -> Row:
    r"""Row-matrix product with a compact Hermitian matrix

    Parameters
    ----------
    row : `Row(N)`
        Row covector.
    mat : `SymMat(N)`
        Hermitian matrix.

    Returns
    -------
    rowmat : `Row(N)`
        Row-matrix product.

    """
    if not isinstance(row, Row) or not isinstance(mat, SymMat):
        raise TypeError('row_symmat expects a Row and a SymMat')
    if row.is_composite:
        raise TypeError('row_symmat: composite elements are not supported')
    nb_prm = mat.size
    if len(row) != nb_prm:
        raise ShapeMismatchError('row_symmat', row.shape, mat.shape)
    dtype = promote(row, mat).dtype
    diag, uppr, lowr = _split(mat, dtype)
    row = row.value.to(dtype)
    if nb_prm == 1:
        rm = _sym.row_symmat1(row, diag, uppr, lowr)
    elif nb_prm == 2:
        rm = _sym.row_symmat2(row, diag, uppr, lowr)
    elif nb_prm == 3:
        rm = _sym.row_symmat3(row, diag, uppr, lowr)
    else:
        rm = _sym.row_symmatn(row, diag, uppr, lowr)
    return Row._from_raw(rm)
