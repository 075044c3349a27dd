from nitorch_smallmat.elements import Element, promote
from nitorch_smallmat.shapes import Vec
import torch
import pytest

dtypes = [torch.int64, torch.float32, torch.float64,
          torch.complex64, torch.complex128]


@pytest.mark.parametrize("dtype1", dtypes)
@pytest.mark.parametrize("dtype2", dtypes)
def test_promotion_is_symmetric(dtype1, dtype2):
    e1 = Element(dtype1)
    e2 = Element(dtype2, negated=True)
    assert e1.result(e2) == e2.result(e1)
    assert e1.result(e2).mul == Element(torch.promote_types(dtype1, dtype2))
    # views never survive promotion
    add = e1.result(e2).add
    assert not add.negated and not add.conjugated


def test_herm():
    assert Element(torch.float64).herm() == Element(torch.float64)
    herm = Element(torch.complex128).herm()
    assert herm.conjugated and not herm.negated
    assert herm.herm() == Element(torch.complex128)
    assert Element(torch.float32, negated=True).herm().negated


def test_std_number():
    assert Element(torch.int64).std_number.dtype == torch.get_default_dtype()
    assert Element(torch.float64).std_number.dtype == torch.float64
    neg = Element(torch.complex64, negated=True, conjugated=True)
    assert neg.std_number == Element(torch.complex64)
    assert neg.number == Element(torch.complex64)


def test_apply_views():
    raw = torch.tensor([1 + 2j, -3 + 0.5j], dtype=torch.complex128)
    neg = Element(raw.dtype, negated=True)
    conj = Element(raw.dtype, conjugated=True)
    both = neg.conjugate()
    assert torch.equal(neg.apply(raw), -raw)
    assert torch.equal(conj.apply(raw), raw.conj().resolve_conj())
    assert torch.equal(both.apply(raw), -raw.conj().resolve_conj())
    # applying twice undoes the view
    assert torch.equal(both.apply(both.apply(raw)), raw)


def test_conjugating_reals_is_noop():
    e = Element(torch.float64).conjugate()
    assert not e.conjugated
    assert e == Element(torch.float64)


def test_element_of():
    assert Element.of(torch.zeros(2, dtype=torch.int32)).dtype == torch.int32
    assert Element.of(2.).dtype == torch.float32
    v = -Vec([1., 2.], dtype=torch.float64)
    assert Element.of(v) == Element(torch.float64, negated=True)
    assert promote(v, 1j).dtype == torch.complex128
    assert repr(v.element) == 'negator<float64>'
