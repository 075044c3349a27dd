import torch


def get_test_devices():
    devices = [('cpu', 1), ('cpu', 4)]
    if torch.cuda.is_available():
        print('cuda backend available')
        devices.append('cuda')
    return devices


def init_device(device):
    if isinstance(device, (list, tuple)):
        device, param = device
    else:
        param = 1 if device == 'cpu' else 0
    if device == 'cuda':
        torch.cuda.set_device(param)
        torch.cuda.init()
        try:
            torch.cuda.empty_cache()
        except RuntimeError:
            pass
        device = '{}:{}'.format(device, param)
    else:
        assert device == 'cpu'
        torch.set_num_threads(param)
    device = torch.device(device)
    return device


def randn_complex(*shape, **backend):
    backend.setdefault('dtype', torch.complex128)
    return torch.randn(shape, **backend)


def random_invertible(n, **backend):
    mat = torch.randn([n, n], **backend)
    mat.diagonal(0, -1, -2).add_(10)
    return mat


def randn_dtype(*shape, dtype, device=None):
    # small integers keep integer products exact
    if dtype.is_floating_point or dtype.is_complex:
        return torch.randn(shape, dtype=dtype, device=device)
    return torch.randint(-9, 10, shape, dtype=dtype, device=device)


def allclose(x, y):
    if x.dtype.is_floating_point or x.dtype.is_complex:
        return torch.allclose(x, y)
    return torch.equal(x, y)
