"""
## Overview

Fixed-size containers: column vectors (`Vec`), row covectors (`Row`),
general matrices (`Mat`) and Hermitian matrices stored in a compact way
(`SymMat`).

Containers are immutable values. Each one wraps a "raw" tensor and an
`Element` type. Unary minus and `conj()` return views that share the raw
tensor and only toggle a flag of the element type; `value` materializes
the elements.

`SymMat` uses the same compact layout as the other nitorch symmetric
routines: the diagonal first, followed by the rows of the upper
triangle, i.e.:

    [ a d e ]
    [ . b f ]   =>  [a b c d e f]
    [ . . c ]

The lower triangle is never stored. It is the conjugate of the upper
triangle (for real elements, the matrix is simply symmetric).

Containers returned by a non-conforming product hold other containers
as elements. Their raw tensor has shape `outer.shape + inner.shape` and
element access returns an inner container.

---
"""
__all__ = ['Vec', 'Row', 'Mat', 'SymMat']
import torch
from .elements import Element
from .errors import ShapeMismatchError
from .utils import is_scalar, triangular_root, upper_index


class SmallMatrix:
    """Base class for fixed-size containers"""

    __slots__ = ('_raw', '_element', '_inner')

    # number of raw dimensions used by the container layout
    _layout_ndim = 1
    # composite level: matrices are more composite than vectors
    _rank = 1

    def __init__(self, data, dtype=None, device=None):
        if isinstance(data, SmallMatrix):
            data = data.value
        raw = torch.as_tensor(data, dtype=dtype, device=device)
        if raw.dim() != self._layout_ndim or 0 in raw.shape:
            raise ValueError(f'{type(self).__name__} expects a non-empty '
                             f'{self._layout_ndim}D tensor but got shape '
                             f'{tuple(raw.shape)}')
        self._raw = raw
        self._element = Element(raw.dtype)
        self._inner = None

    @classmethod
    def _from_raw(cls, raw, element=None, inner=None):
        obj = object.__new__(cls)
        obj._raw = raw
        obj._element = element or Element(raw.dtype)
        obj._inner = inner
        return obj

    def _view(self, element):
        return self._from_raw(self._raw, element, self._inner)

    # ------------------------------------------------------------------
    #   attributes
    # ------------------------------------------------------------------

    @property
    def raw(self):
        """Stored values, before the view flags are applied"""
        return self._raw

    @property
    def element(self):
        return self._element

    @property
    def dtype(self):
        return self._element.dtype

    @property
    def device(self):
        return self._raw.device

    @property
    def value(self):
        """Materialized values (views applied)"""
        return self._element.apply(self._raw)

    @property
    def is_composite(self):
        return self._inner is not None

    @property
    def inner(self):
        """Container type of the elements, or None for scalar elements"""
        return self._inner

    @property
    def shape(self):
        return tuple(self._raw.shape[:self._layout_ndim])

    def __len__(self):
        return self.shape[0]

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def _wrap_element(self, value):
        if self._inner is not None:
            return self._inner._from_raw(value)
        return value

    # ------------------------------------------------------------------
    #   views and conversions
    # ------------------------------------------------------------------

    def __neg__(self):
        return self._view(self._element.negate())

    def __pos__(self):
        return self

    def conj(self):
        """Lazily conjugated view"""
        return self._view(self._element.conjugate())

    def resolve(self):
        """Materialize the view flags into a new container"""
        return self._from_raw(self.value, None, self._inner)

    def to(self, *args, **kwargs):
        raw = self._raw.to(*args, **kwargs)
        element = Element(raw.dtype, self._element.negated,
                          self._element.conjugated)
        return self._from_raw(raw, element, self._inner)

    def tolist(self):
        return self.value.tolist()

    def _inner_herm(self, value):
        # Hermitian transpose of composite elements, in place of a
        # conjugation
        value = value.conj().resolve_conj()
        inner = self._inner
        if inner is Mat:
            value = value.transpose(-1, -2)
        elif inner is Vec:
            inner = Row
        elif inner is Row:
            inner = Vec
        return value, inner

    # ------------------------------------------------------------------
    #   arithmetic
    # ------------------------------------------------------------------

    def _check_same(self, other, op):
        if type(other) is not type(self):
            raise TypeError(f'{op}: cannot combine {type(self).__name__} '
                            f'and {type(other).__name__}')
        if self._raw.shape != other._raw.shape or \
                self._inner is not other._inner:
            raise ShapeMismatchError(op, self.shape, other.shape)

    def __add__(self, other):
        if not isinstance(other, SmallMatrix):
            return NotImplemented
        self._check_same(other, 'add')
        return self._from_raw(self.value + other.value, None, self._inner)

    def __sub__(self, other):
        if not isinstance(other, SmallMatrix):
            return NotImplemented
        self._check_same(other, 'sub')
        return self._from_raw(self.value - other.value, None, self._inner)

    def __mul__(self, other):
        from .products import multiply
        if not (isinstance(other, SmallMatrix) or is_scalar(other)):
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other):
        from .products import multiply
        if not is_scalar(other):
            return NotImplemented
        return multiply(other, self)

    def __matmul__(self, other):
        from .products import matmul
        if not isinstance(other, SmallMatrix):
            return NotImplemented
        return matmul(self, other)

    def __truediv__(self, other):
        if not is_scalar(other):
            return NotImplemented
        from .products import multiply
        other = torch.as_tensor(other, device=self.device)
        std = self._element.result(other).mul.std_number
        return multiply(self, other.to(std.dtype).reciprocal())

    def __mod__(self, other):
        from .cross import cross
        if not isinstance(other, SmallMatrix):
            return NotImplemented
        return cross(self, other)

    def __repr__(self):
        name = type(self).__name__
        data = self.value.tolist()
        s = f'{name}({data}, dtype={self._element}'
        if self._inner is not None:
            s += f', inner={self._inner.__name__}'
        return s + ')'


class _VectorLike(SmallMatrix):
    """Common methods of `Vec` and `Row`"""

    __slots__ = ()
    _transposed = None

    @classmethod
    def zeros(cls, n, **backend):
        return cls(torch.zeros(n, **backend))

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._from_raw(self._raw[index], self._element,
                                  self._inner)
        return self._wrap_element(self._element.apply(self._raw[index]))

    def drop(self, i):
        """Copy without element `i`"""
        n = len(self)
        keep = [k for k in range(n) if k != i]
        raw = self._raw[keep]
        return self._from_raw(raw, self._element, self._inner)

    def positional_transpose(self):
        """Same elements, opposite orientation, no conjugation"""
        return self._transposed._from_raw(self._raw, self._element,
                                          self._inner)

    @property
    def H(self):
        """Hermitian transpose"""
        if self._inner is not None:
            value, inner = self._inner_herm(self.value)
            return self._transposed._from_raw(value, None, inner)
        return self._transposed._from_raw(self._raw, self._element.herm())

    @property
    def T(self):
        return self.positional_transpose()


class Vec(_VectorLike):
    """Column vector of fixed length"""
    __slots__ = ()


class Row(_VectorLike):
    """Row covector of fixed length"""
    __slots__ = ()


Vec._transposed = Row
Row._transposed = Vec


class Mat(SmallMatrix):
    """General matrix with a fixed number of rows and columns"""

    __slots__ = ()
    _layout_ndim = 2
    _rank = 2

    @classmethod
    def zeros(cls, m, n=None, **backend):
        n = m if n is None else n
        return cls(torch.zeros([m, n], **backend))

    @classmethod
    def eye(cls, n, **backend):
        return cls(torch.eye(n, **backend))

    @property
    def nrow(self):
        return self.shape[0]

    @property
    def ncol(self):
        return self.shape[1]

    @property
    def is_square(self):
        return self.nrow == self.ncol

    def __getitem__(self, index):
        if isinstance(index, tuple):
            i, j = index
            return self._wrap_element(self._element.apply(self._raw[i, j]))
        return self.row(index)

    def row(self, i):
        return Row._from_raw(self._raw[i], self._element, self._inner)

    def col(self, j):
        return Vec._from_raw(self._raw[:, j], self._element, self._inner)

    def diag(self):
        return Vec._from_raw(self._raw.diagonal(0, 0, 1).movedim(-1, 0),
                             self._element, self._inner)

    def drop_row(self, i):
        keep = [k for k in range(self.nrow) if k != i]
        return Mat._from_raw(self._raw[keep], self._element, self._inner)

    def drop_col(self, j):
        keep = [k for k in range(self.ncol) if k != j]
        return Mat._from_raw(self._raw[:, keep], self._element, self._inner)

    def sub_mat(self, i, j, m, n):
        """Submatrix of shape (m, n) starting at element (i, j)"""
        raw = self._raw[i:i+m, j:j+n]
        if tuple(raw.shape[:2]) != (m, n):
            raise ShapeMismatchError('sub_mat', self.shape, (i+m, j+n))
        return Mat._from_raw(raw, self._element, self._inner)

    def positional_transpose(self):
        return Mat._from_raw(self._raw.transpose(0, 1), self._element,
                             self._inner)

    @property
    def T(self):
        return self.positional_transpose()

    @property
    def H(self):
        """Hermitian transpose"""
        if self._inner is not None:
            value, inner = self._inner_herm(self.value.transpose(0, 1))
            return Mat._from_raw(value, None, inner)
        return Mat._from_raw(self._raw.transpose(0, 1), self._element.herm())

    def det(self, **kwargs):
        from .linalg import det
        return det(self, **kwargs)

    def invert(self):
        from .linalg import inverse
        return inverse(self)


class SymMat(SmallMatrix):
    """Hermitian matrix that stores its diagonal and upper triangle"""

    __slots__ = ()
    _rank = 2

    def __init__(self, data, dtype=None, device=None):
        super().__init__(data, dtype, device)
        if triangular_root(len(self._raw)) is None:
            raise ValueError(f'SymMat expects N*(N+1)/2 elements but got '
                             f'{len(self._raw)}')

    @classmethod
    def from_full(cls, mat, dtype=None, device=None):
        """Compact symmetric matrix built from the upper half of `mat`"""
        if isinstance(mat, SmallMatrix):
            mat = mat.value
        mat = torch.as_tensor(mat, dtype=dtype, device=device)
        if mat.dim() != 2 or mat.shape[0] != mat.shape[1]:
            raise ShapeMismatchError('from_full', tuple(mat.shape))
        n = mat.shape[0]
        upper = [mat[i, j] for i in range(n) for j in range(i+1, n)]
        raw = mat.diagonal()
        if upper:
            raw = torch.cat([raw, torch.stack(upper)])
        return cls._from_raw(raw)

    @classmethod
    def zeros(cls, n, **backend):
        return cls(torch.zeros(n * (n + 1) // 2, **backend))

    @property
    def size(self):
        return triangular_root(self._raw.shape[0])

    @property
    def shape(self):
        n = self.size
        return (n, n)

    def diag(self):
        return Vec._from_raw(self._raw[:self.size], self._element)

    def elt_upper(self, i, j):
        """Element (i, j) with i < j"""
        return self._element.apply(self._raw[upper_index(self.size, i, j)])

    def elt_lower(self, i, j):
        """Element (i, j) with i > j"""
        elt = self.elt_upper(j, i)
        return elt.conj().resolve_conj()

    def row(self, i):
        return self.full().row(i)

    def __getitem__(self, index):
        if not isinstance(index, tuple):
            return self.row(index)
        i, j = index
        if i == j:
            return self._element.apply(self._raw[i])
        elif i < j:
            return self.elt_upper(i, j)
        else:
            return self.elt_lower(i, j)

    def full(self):
        """Expand into a full `Mat`"""
        n = self.size
        value = self.value
        upper = value[n:]
        lower = upper.conj().resolve_conj()
        full = value.new_empty([n, n])
        full.diagonal().copy_(value[:n])
        c = n
        for i in range(n):
            for j in range(i+1, n):
                full[i, j] = upper[c-n]
                full[j, i] = lower[c-n]
                c += 1
        return Mat._from_raw(full)

    def positional_transpose(self):
        # the transpose of a Hermitian matrix is its conjugate
        return self.conj()

    @property
    def T(self):
        return self.positional_transpose()

    @property
    def H(self):
        return self

    def det(self, **kwargs):
        from .linalg import det
        return det(self, **kwargs)

    def invert(self):
        from .linalg import inverse
        return inverse(self)
