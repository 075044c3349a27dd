"""
Kernels for products with compact Hermitian matrices.

Each kernel receives the diagonal `diag`, the upper triangle `uppr`
(rows of the upper half, in order) and the lower triangle `lowr`
(the conjugate of `uppr`, same order). For real matrices `uppr` and
`lowr` are the same tensor.
"""
import torch


# 1 flop
@torch.jit.script
def sym_matvec1(diag, uppr, lowr, vec):
    return diag * vec


# 6 flops
@torch.jit.script
def sym_matvec2(diag, uppr, lowr, vec):
    return torch.stack([diag[0] * vec[0] + uppr[0] * vec[1],
                        lowr[0] * vec[0] + diag[1] * vec[1]])


# 15 flops
@torch.jit.script
def sym_matvec3(diag, uppr, lowr, vec):
    return torch.stack([
        diag[0] * vec[0] + uppr[0] * vec[1] + uppr[1] * vec[2],
        lowr[0] * vec[0] + diag[1] * vec[1] + uppr[2] * vec[2],
        lowr[1] * vec[0] + lowr[2] * vec[1] + diag[2] * vec[2],
    ])


@torch.jit.script
def sym_matvecn(diag, uppr, lowr, vec):
    nb_prm = diag.shape[0]
    mm = diag * vec
    c = 0
    for i in range(nb_prm):
        for j in range(i+1, nb_prm):
            mm[i] += uppr[c] * vec[j]
            mm[j] += lowr[c] * vec[i]
            c += 1
    return mm


# 1 flop
@torch.jit.script
def row_symmat1(row, diag, uppr, lowr):
    return row * diag


# 6 flops
@torch.jit.script
def row_symmat2(row, diag, uppr, lowr):
    return torch.stack([row[0] * diag[0] + row[1] * lowr[0],
                        row[0] * uppr[0] + row[1] * diag[1]])


# 15 flops
@torch.jit.script
def row_symmat3(row, diag, uppr, lowr):
    return torch.stack([
        row[0] * diag[0] + row[1] * lowr[0] + row[2] * lowr[1],
        row[0] * uppr[0] + row[1] * diag[1] + row[2] * lowr[2],
        row[0] * uppr[1] + row[1] * uppr[2] + row[2] * diag[2],
    ])


@torch.jit.script
def row_symmatn(row, diag, uppr, lowr):
    nb_prm = diag.shape[0]
    mm = row * diag
    c = 0
    for i in range(nb_prm):
        for j in range(i+1, nb_prm):
            mm[j] += row[i] * uppr[c]
            mm[i] += row[j] * lowr[c]
            c += 1
    return mm
