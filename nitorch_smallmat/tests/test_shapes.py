from nitorch_smallmat.shapes import Vec, Row, Mat, SymMat
from nitorch_smallmat.errors import ShapeMismatchError
import torch
import pytest


def test_views_share_storage():
    v = Vec([1., 2., 3.], dtype=torch.float64)
    n = -v
    assert n.raw is v.raw
    assert n.element.negated
    assert torch.equal(n.value, -v.value)
    assert torch.equal((-n).value, v.value)
    assert torch.equal(n.resolve().raw, -v.value)
    assert not n.resolve().element.negated


def test_conj_view():
    v = Vec([1 + 1j, 2 - 3j])
    c = v.conj()
    assert c.raw is v.raw
    assert torch.equal(c.value, v.value.conj().resolve_conj())
    assert torch.equal(c.conj().value, v.value)


def test_positional_and_hermitian_transpose():
    v = Vec([1 + 1j, 2 - 3j])
    r = v.positional_transpose()
    assert isinstance(r, Row)
    assert torch.equal(r.value, v.value)
    h = v.H
    assert isinstance(h, Row)
    assert torch.equal(h.value, v.value.conj().resolve_conj())
    assert isinstance(r.positional_transpose(), Vec)

    m = Mat([[1, 2j], [3, 4]])
    assert torch.equal(m.T.value, m.value.T)
    assert torch.equal(m.H.value, m.value.T.conj().resolve_conj())


def test_element_access():
    m = Mat([[1, 2, 3], [4, 5, 6]])
    assert m.shape == (2, 3)
    assert m[1, 2].item() == 6
    assert isinstance(m[0], Row)
    assert m.row(1).tolist() == [4, 5, 6]
    assert m.col(2).tolist() == [3, 6]
    assert m.drop_row(0).tolist() == [[4, 5, 6]]
    assert m.drop_col(1).tolist() == [[1, 3], [4, 6]]
    assert m.sub_mat(0, 1, 2, 2).tolist() == [[2, 3], [5, 6]]
    assert (-m)[0, 0].item() == -1
    v = Vec([1, 2, 3])
    assert [x.item() for x in v] == [1, 2, 3]
    assert v.drop(1).tolist() == [1, 3]


def test_symmat_layout():
    s = SymMat([1., 2., 3., 4., 5., 6.])
    assert s.size == 3
    assert s.shape == (3, 3)
    assert s.diag().tolist() == [1., 2., 3.]
    assert s[0, 1].item() == 4.
    assert s[2, 0].item() == 5.
    assert s[2, 1].item() == 6.
    full = torch.tensor([[1., 4., 5.], [4., 2., 6.], [5., 6., 3.]])
    assert torch.equal(s.full().value, full)
    assert torch.equal(SymMat.from_full(full).raw, s.raw)


def test_symmat_hermitian():
    s = SymMat([1, 2, 1 + 1j])
    assert s.elt_upper(0, 1).item() == 1 + 1j
    assert s.elt_lower(1, 0).item() == 1 - 1j
    full = s.full().value
    assert torch.equal(full, full.T.conj().resolve_conj())
    assert torch.equal(s.T.full().value, full.T)


def test_bad_shapes():
    with pytest.raises(ValueError):
        SymMat([1., 2.])
    with pytest.raises(ValueError):
        Vec([[1., 2.]])
    with pytest.raises(ValueError):
        Mat([])
    with pytest.raises(ShapeMismatchError):
        Vec([1, 2]) + Vec([1, 2, 3])
    with pytest.raises(TypeError):
        Vec([1, 2]) + Row([1, 2])


def test_add_sub_scale():
    a = Vec([1., 2.])
    b = Vec([3., 5.])
    assert (a + b).tolist() == [4., 7.]
    assert (a - (-b)).tolist() == [4., 7.]
    assert (2 * a).tolist() == [2., 4.]
    assert (a * 2).tolist() == [2., 4.]
    assert (Vec([1, 2]) / 2).tolist() == [0.5, 1.]


def test_to():
    v = -Vec([1, 2])
    w = v.to(torch.float64)
    assert w.dtype == torch.float64
    assert w.element.negated
    assert w.tolist() == [-1., -2.]
