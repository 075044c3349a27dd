from .utils import get_test_devices, init_device
from nitorch_smallmat.shapes import Vec, Row, Mat, SymMat
from nitorch_smallmat.cross import cross, cross_mat, cross_mat_sq
from nitorch_smallmat.products import dot, outer
from nitorch_smallmat.errors import ShapeMismatchError
import torch
import pytest

devices = get_test_devices()


def test_cross_scenario():
    a = Vec([1, 0, 0])
    b = Vec([0, 1, 0])
    assert cross(a, b).tolist() == [0, 0, 1]
    assert (a % b).tolist() == [0, 0, 1]
    assert (cross_mat(a) * b).tolist() == [0, 0, 1]


@pytest.mark.parametrize("device", devices)
def test_cross3(device):
    device = init_device(device)
    backend = dict(dtype=torch.double, device=device)
    a = torch.randn([3], **backend)
    b = torch.randn([3], **backend)

    ab = cross(Vec(a), Vec(b))
    assert isinstance(ab, Vec)
    assert torch.allclose(ab.value, torch.linalg.cross(a, b))
    assert torch.equal(ab.value, (-cross(Vec(b), Vec(a))).value)
    assert torch.equal(cross(Vec(a), Vec(a)).value, torch.zeros_like(a))


def test_cross_orientation():
    a, b = [1., 2., 3.], [4., 5., 6.]
    assert isinstance(cross(Vec(a), Vec(b)), Vec)
    assert isinstance(cross(Row(a), Vec(b)), Row)
    assert isinstance(cross(Vec(a), Row(b)), Row)
    assert isinstance(cross(Row(a), Row(b)), Row)
    assert cross(Row(a), Vec(b)).tolist() == cross(Vec(a), Vec(b)).tolist()


def test_cross_never_conjugates():
    a = torch.tensor([1j, 2, 3 - 1j])
    b = torch.tensor([2, 1 + 1j, 0.5])
    assert torch.allclose(cross(Row(a), Vec(b)).value, torch.linalg.cross(a, b))


def test_cross2():
    a = Vec([1, 2])
    b = Row([3, 4])
    assert cross(a, b).item() == 1 * 4 - 2 * 3
    assert (a % b).item() == -2
    m = cross_mat(a)
    assert isinstance(m, Row)
    assert m.tolist() == [-2, 1]
    assert (m * b.positional_transpose()).item() == cross(a, b).item()


def test_cross_mat_exact():
    g = torch.Generator().manual_seed(1234)
    for _ in range(10):
        a = torch.randint(-100, 100, [3], generator=g)
        b = torch.randint(-100, 100, [3], generator=g)
        assert torch.equal((cross_mat(Vec(a)) * Vec(b)).value,
                           cross(Vec(a), Vec(b)).value)
        assert torch.equal((cross_mat(Row(a)) * Vec(b)).value,
                           cross(Vec(a), Vec(b)).value)
        assert torch.equal(cross_mat(Vec(a)).value,
                           -cross_mat(Vec(a)).value.T)


def test_cross_mat_negated():
    v = Vec([1., 2., 3.])
    n = -v
    m = cross_mat(n)
    assert isinstance(m, Mat)
    assert not m.element.negated
    assert torch.equal(m.value, cross_mat(n.resolve()).value)
    assert torch.equal(m.value, -cross_mat(v).value)
    m2 = cross_mat(-Vec([1., 2.]))
    assert not m2.element.negated
    assert m2.tolist() == [2., -1.]


@pytest.mark.parametrize("device", devices)
def test_cross_mat_sq(device):
    device = init_device(device)
    backend = dict(dtype=torch.double, device=device)
    v = Vec(torch.randn([3], **backend))
    w = Vec(torch.randn([3], **backend))

    s = cross_mat_sq(v)
    assert isinstance(s, SymMat)
    assert torch.allclose((s * w).value, (-(v % (v % w))).value)
    expected = Mat.eye(3, **backend) * dot(v, v) - outer(v, v)
    assert torch.allclose(s.full().value, expected.value)
    m = cross_mat(v)
    assert torch.allclose(s.full().value, (-(m * m)).value)


def test_cross_mat_sq_closed_form():
    s = cross_mat_sq(Vec([1., 2., 3.]))
    assert s.tolist() == [13., 10., 5., -2., -3., -6.]
    n = cross_mat_sq(-Vec([1., 2., 3.]))
    assert not n.element.negated
    assert n.tolist() == s.tolist()
    assert cross_mat_sq(Row([1., 2., 3.])).tolist() == s.tolist()


def test_cross_errors():
    with pytest.raises(ShapeMismatchError):
        cross(Vec([1, 2]), Vec([1, 2, 3]))
    with pytest.raises(ShapeMismatchError):
        cross(Vec([1, 2, 3, 4]), Vec([1, 2, 3, 4]))
    with pytest.raises(ShapeMismatchError):
        cross_mat_sq(Vec([1., 2.]))
    with pytest.raises(TypeError):
        cross_mat_sq(Vec([1j, 2., 3.]))
    with pytest.raises(TypeError):
        cross(Mat([[1, 2, 3]]), Vec([1, 2, 3]))


def test_cross_promotion():
    out = cross(Vec([1, 0, 0]), Vec([0., 1., 0.], dtype=torch.double))
    assert out.dtype == torch.double
    assert out.tolist() == [0., 0., 1.]
    out = cross(Vec([1, 2]), Vec([3j, 4]))
    assert out.dtype == torch.complex64
