"""
## Overview

Element types of small matrices.

An element type is a torch dtype (integer, floating or complex) plus two
"view" flags. A negated view represents `-x` and a conjugated view
represents `conj(x)` without ever computing the transformed values: the
raw tensor is kept untouched and the flags are folded in when the values
are combined with something else. Unary minus or `conj()` on a container
is therefore free.

Promotion follows `torch.promote_types`. Views never survive an
arithmetic operation, so the promoted type of a sum or a product is
always a plain dtype.

---
"""
__all__ = ['Element', 'Result', 'promote']
import torch
from collections import namedtuple


Result = namedtuple('Result', ['add', 'mul'])


class Element:
    """Element type: dtype plus negation/conjugation view flags"""

    __slots__ = ('dtype', 'negated', 'conjugated')

    def __init__(self, dtype=None, negated=False, conjugated=False):
        if dtype is None:
            dtype = torch.get_default_dtype()
        object.__setattr__(self, 'dtype', dtype)
        object.__setattr__(self, 'negated', bool(negated))
        # conjugating a real number does nothing
        object.__setattr__(self, 'conjugated',
                           bool(conjugated) and dtype.is_complex)

    def __setattr__(self, key, value):
        raise AttributeError('Element types are immutable')

    @classmethod
    def of(cls, x):
        """Element type of a tensor, number or container"""
        if isinstance(x, Element):
            return x
        element = getattr(x, 'element', None)
        if isinstance(element, Element):
            return element
        if torch.is_tensor(x):
            return cls(x.dtype)
        return cls(torch.as_tensor(x).dtype)

    @property
    def is_complex(self):
        return self.dtype.is_complex

    @property
    def is_floating_point(self):
        return self.dtype.is_floating_point

    @property
    def number(self):
        """Same dtype, with all views stripped"""
        return Element(self.dtype)

    @property
    def std_number(self):
        """Plain numeric type used for reciprocals and divisions"""
        if self.dtype.is_floating_point or self.dtype.is_complex:
            return Element(self.dtype)
        return Element(torch.get_default_dtype())

    def herm(self):
        """Element type of the Hermitian transpose"""
        return Element(self.dtype, self.negated, not self.conjugated)

    def negate(self):
        return Element(self.dtype, not self.negated, self.conjugated)

    def conjugate(self):
        return Element(self.dtype, self.negated, not self.conjugated)

    def result(self, other):
        """Promoted element types of `self + other` and `self * other`"""
        other = Element.of(other)
        dtype = torch.promote_types(self.dtype, other.dtype)
        return Result(Element(dtype), Element(dtype))

    def apply(self, raw):
        """Materialize raw values through the view flags"""
        if self.conjugated:
            raw = raw.conj().resolve_conj()
        if self.negated:
            raw = raw.neg()
        return raw

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return (self.dtype, self.negated, self.conjugated) == \
               (other.dtype, other.negated, other.conjugated)

    def __hash__(self):
        return hash((self.dtype, self.negated, self.conjugated))

    def __repr__(self):
        s = str(self.dtype).split('.')[-1]
        if self.conjugated:
            s = f'conjugate<{s}>'
        if self.negated:
            s = f'negator<{s}>'
        return s


def promote(*elements):
    """Promoted element type of a product of several operands"""
    elements = [Element.of(e) for e in elements]
    out = elements[0].number
    for e in elements[1:]:
        out = out.result(e).mul
    return out
