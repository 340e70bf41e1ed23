# heat_gmres.py
"""Compare order reduction strategies as initial-guess generators for GMRES.

Solves the heat equation u_t = nu * (u_xx + u_yy) + f(x, y, t) on the unit
square with homogeneous Dirichlet boundary conditions, implicit Euler in
time and second-order finite differences in space. Each timestep requires a
linear solve, done with ILU-preconditioned GMRES. The initial guess is either
the previous solution (baseline) or the solution of a reduced system built
from the basis of an order reduction strategy.

Usage:

    python heat_gmres.py --grid 60 --steps 200 --M 20 --m 10 --seed 1
"""

import logging
import argparse
import numpy as np
import scipy.sparse as sparse
import scipy.sparse.linalg as spla

import romsketch


def laplacian(N: int) -> sparse.csc_matrix:
    """Five-point Laplacian on the N x N interior grid of the unit square."""
    h = 1 / (N + 1)
    D = sparse.diags([1.0, -2.0, 1.0], [-1, 0, 1], shape=(N, N)) / h**2
    eye = sparse.identity(N)
    return (sparse.kron(eye, D) + sparse.kron(D, eye)).tocsc()


def forcing(N: int, t: float) -> np.ndarray:
    """Time-dependent source term on the interior grid."""
    x = np.linspace(0, 1, N + 2)[1:-1]
    X, Y = np.meshgrid(x, x, indexing="ij")
    return (
        np.sin(np.pi * X) * np.sin(2 * np.pi * Y) * np.cos(4 * t)
        + np.exp(-50 * ((X - 0.5 - 0.2 * np.sin(t)) ** 2 + (Y - 0.5) ** 2))
    ).ravel()


def gmres_iterations(A, b, x0, M_ilu, tol: float = 1e-7):
    """Solve A x = b with GMRES, returning the solution and iteration count."""
    count = [0]

    def callback(_):
        count[0] += 1

    x, info = spla.gmres(
        A,
        b,
        x0=x0,
        rtol=tol,
        restart=A.shape[0],
        M=M_ilu,
        callback=callback,
        callback_type="pr_norm",
    )
    if info != 0:
        logging.warning(f"GMRES did not converge (info = {info:d})")
    return x, count[0]


def run(strategy, N: int, steps: int, dt: float, nu: float = 0.1):
    """March in time, returning the GMRES iteration count of each step."""
    n = N * N
    A = (sparse.identity(n) - dt * nu * laplacian(N)).tocsc()
    ilu = spla.spilu(A, fill_factor=1, drop_tol=0)
    M_ilu = spla.LinearOperator((n, n), ilu.solve)

    u = np.zeros(n)
    iterations = []
    history = 0
    for step in range(steps):
        t = (step + 1) * dt
        b = u + dt * forcing(N, t)

        if strategy is None or history < strategy.history_width:
            x0 = u
        else:
            strategy.order_reduction()
            x0 = romsketch.rom.initial_guess(
                strategy,
                A,
                b,
                method="galerkin" if strategy.orthonormal else "minres",
            )

        u, its = gmres_iterations(A, b, x0, M_ilu)
        iterations.append(its)
        if strategy is not None:
            strategy.push(u)
            history += 1
    return np.array(iterations)


def main(args):
    rng = np.random.default_rng(args.seed)
    n = args.grid**2
    strategies = {
        "previous step": None,
        "POD": romsketch.POD(n, args.M, args.m),
        "RandomizedQR": romsketch.RandomizedQR(
            n, args.M, args.m, freq=args.freq, rng=rng
        ),
        "RandomizedSVD": romsketch.RandomizedSVD(
            n, args.M, args.m, p=args.p, freq=args.freq, rng=rng
        ),
        "Nystrom": romsketch.Nystrom(
            n, args.M, args.k, args.nys_p, rng=rng
        ),
    }

    if args.logfile:
        romsketch.utils.TimedBlock.add_logfile(args.logfile)

    for label, strategy in strategies.items():
        with romsketch.utils.TimedBlock(f"{label:>15}") as timer:
            its = run(strategy, args.grid, args.steps, args.dt)
        logging.info(
            f"{label}: mean GMRES iterations {its.mean():.2f} "
            f"({timer.elapsed:.2f} s)"
        )
        print(f"{'':>15}  mean GMRES iterations: {its.mean():.2f}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--grid", type=int, default=60,
                        help="interior grid points per dimension")
    parser.add_argument("--steps", type=int, default=200,
                        help="number of timesteps")
    parser.add_argument("--dt", type=float, default=1e-3,
                        help="timestep size")
    parser.add_argument("--M", type=int, default=20,
                        help="number of snapshots in the history")
    parser.add_argument("--m", type=int, default=10,
                        help="target rank for POD and randomized strategies")
    parser.add_argument("--p", type=int, default=2,
                        help="oversampling for RandomizedSVD")
    parser.add_argument("--k", type=int, default=7,
                        help="target rank for Nystrom")
    parser.add_argument("--nys-p", type=int, default=3,
                        help="oversampling for Nystrom")
    parser.add_argument("--freq", type=int, default=50,
                        help="sketch resync frequency")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed")
    parser.add_argument("--logfile", type=str, default=None,
                        help="file to log timings to")
    main(parser.parse_args())
