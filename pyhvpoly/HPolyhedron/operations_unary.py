# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the methods involving just one halfspace system

import warnings

import numpy as np

from pyhvpoly.common import sanitize_h_poly, solve_lp
from pyhvpoly.common.constants import PYHVPOLY_ZERO_NORMAL


def find_interior(h_poly, cvxpy_args=None):
    r"""Find a point strictly inside the polyhedron described by the halfspace system h_poly.

    Args:
        h_poly (array_like): Halfspace system of shape (m, 4). Each row [a, b, c, d] encodes a x + b y + c z + d <= 0.
        cvxpy_args (dict, optional): CVXPY arguments to be passed to the LP solver. Defaults to None, in which case
            DEFAULT_CVXPY_ARGS_LP is used.

    Raises:
        ValueError: When h_poly is not a valid halfspace system

    Returns:
        tuple: A tuple with two items
            #. interior (numpy.ndarray): Point returned by the LP as a 1D array of length 3. Contains NaNs when the LP
               is infeasible or unbounded.
            #. success (bool): True when the polyhedron has a non-empty interior, and interior lies strictly inside.

    Notes:
        Each row is normalized by the norm of its normal vector :math:`n_i = (a_i, b_i, c_i)`. We then solve the LP
        for :math:`x` and a uniform inward shift :math:`w`,

        .. math ::
            \text{minimize}     &\quad -w \\
            \text{subject to}   &\quad \frac{n_i^\top x}{\|n_i\|} + w \leq -\frac{d_i}{\|n_i\|},\quad\forall i.

        The call succeeds if and only if the optimal value is finite and strictly negative, i.e., every halfspace can
        be tightened by a positive amount while remaining feasible.

        Rows with a zero normal vector can not be normalized. Such a row with :math:`d_i \leq 0` is always satisfied,
        and is skipped with a UserWarning. Such a row with :math:`d_i > 0` is never satisfied, and the call fails.
    """
    h_poly = sanitize_h_poly(h_poly)
    h_norm = np.linalg.norm(h_poly[:, :3], axis=1)
    zero_rows = h_norm <= PYHVPOLY_ZERO_NORMAL
    if zero_rows.any():
        if (h_poly[zero_rows, 3] > 0).any():
            # 0 <= -d < 0 has no solution
            return np.nan * np.ones((3,)), False
        warnings.warn("Skipped some rows in h_poly that had all zeros in the normal vector!", UserWarning)
        h_poly, h_norm = h_poly[~zero_rows, :], h_norm[~zero_rows]
        if h_poly.shape[0] == 0:
            return np.nan * np.ones((3,)), False

    m = h_poly.shape[0]
    A = np.hstack((h_poly[:, :3] / h_norm[:, np.newaxis], np.ones((m, 1))))
    b = -h_poly[:, 3] / h_norm
    c = np.array([0.0, 0.0, 0.0, -1.0])
    x, minmaxsd = solve_lp(c, A, b, cvxpy_args=cvxpy_args, task_str="interior point of a halfspace system")
    return x[:3], bool(np.isfinite(minmaxsd) and minmaxsd < 0.0)


def interior_point(self):
    """Compute a point strictly inside the polyhedron.

    Raises:
        ValueError: When the polyhedron has no interior (empty, lower-dimensional, or unbounded shift LP).

    Returns:
        numpy.ndarray: A point in the interior as a 1D array
    """
    interior, success = find_interior(self.H, cvxpy_args=self.cvxpy_args_lp)
    if not success:
        raise ValueError("Can not compute an interior point for a polyhedron without interior!")
    return interior
