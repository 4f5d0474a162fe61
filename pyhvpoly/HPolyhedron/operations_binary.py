# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the binary operations on halfspace systems (overlap, intersection, and containment)

import numpy as np

from pyhvpoly.common import is_hpolyhedron, sanitize_h_poly, sanitize_points, solve_lp
from pyhvpoly.common.constants import PYHVPOLY_EPS, PYHVPOLY_ZERO


def intersection(h_poly_0, h_poly_1):
    """Stack two halfspace systems. The solution set of the stacked system is the intersection of the two polyhedra.

    Args:
        h_poly_0 (array_like): Halfspace system of shape (m, 4)
        h_poly_1 (array_like): Halfspace system of shape (n, 4)

    Returns:
        numpy.ndarray: Halfspace system of shape (m + n, 4) with the rows of h_poly_0 followed by those of h_poly_1
    """
    return np.vstack((sanitize_h_poly(h_poly_0), sanitize_h_poly(h_poly_1)))


def overlaps(h_poly_0, h_poly_1, eps=PYHVPOLY_EPS, cvxpy_args=None):
    r"""Check if two polyhedra overlap with positive volume.

    Args:
        h_poly_0 (array_like): Halfspace system of shape (m, 4)
        h_poly_1 (array_like): Halfspace system of shape (n, 4)
        eps (float, optional): Margin that the shift LP must exceed. Defaults to PYHVPOLY_EPS.
        cvxpy_args (dict, optional): CVXPY arguments to be passed to the LP solver. Defaults to None.

    Returns:
        bool: True when the intersection has an interior margin larger than eps, and False otherwise (disjoint,
        touching only at the boundary, or infeasible/unbounded LP).

    Notes:
        The rows of the stacked system are used as given (no normalization). We solve

        .. math ::
            \text{minimize}     &\quad -w \\
            \text{subject to}   &\quad n_i^\top x + w \leq -d_i,\quad\forall i,

        and report an overlap when the optimal value is finite and strictly less than -eps. Polyhedra sharing only a
        face give an optimal value of zero, and are not reported as overlapping.
    """
    h_poly = intersection(h_poly_0, h_poly_1)
    A = np.hstack((h_poly[:, :3], np.ones((h_poly.shape[0], 1))))
    b = -h_poly[:, 3]
    c = np.array([0.0, 0.0, 0.0, -1.0])
    _, minmaxsd = solve_lp(c, A, b, cvxpy_args=cvxpy_args, task_str="overlap check of two halfspace systems")
    return bool(np.isfinite(minmaxsd) and minmaxsd < -eps)


def contains_points(h_poly, points, tol=PYHVPOLY_ZERO):
    """Check which points satisfy every halfspace of h_poly.

    Args:
        h_poly (array_like): Halfspace system of shape (m, 4)
        points (array_like): Points arranged row-wise (N times 3), or a single point
        tol (float, optional): Tolerance on each inequality. Defaults to PYHVPOLY_ZERO.

    Returns:
        numpy.ndarray: 1D boolean array of length N
    """
    h_poly = sanitize_h_poly(h_poly)
    points = sanitize_points(points)
    return np.all(points @ h_poly[:, :3].T + h_poly[:, 3] <= tol, axis=1)


def polyhedron_overlaps(self, Q, eps=PYHVPOLY_EPS):
    """Check if the polyhedron overlaps with another polyhedron Q with positive volume.

    Args:
        Q (HPolyhedron | array_like): Polyhedron or halfspace system to check against
        eps (float, optional): Margin that the shift LP must exceed. Defaults to PYHVPOLY_EPS.

    Returns:
        bool: True when the polyhedra overlap, and False otherwise.
    """
    Q_H = Q.H if is_hpolyhedron(Q) else Q
    return overlaps(self.H, Q_H, eps=eps, cvxpy_args=self.cvxpy_args_lp)


def polyhedron_intersection(self, Q):
    """Compute the intersection of the polyhedron with another polyhedron Q.

    Args:
        Q (HPolyhedron | array_like): Polyhedron or halfspace system

    Returns:
        HPolyhedron: Intersection of the two polyhedra. The result may have no interior.
    """
    Q_H = Q.H if is_hpolyhedron(Q) else Q
    new_polyhedron = self.__class__(H=intersection(self.H, Q_H))
    new_polyhedron.cvxpy_args_lp = self.cvxpy_args_lp
    return new_polyhedron


def polyhedron_contains(self, points, tol=PYHVPOLY_ZERO):
    """Check if the polyhedron contains the given points.

    Args:
        points (array_like): Points arranged row-wise (N times 3), or a single point
        tol (float, optional): Tolerance on each inequality. Defaults to PYHVPOLY_ZERO.

    Returns:
        bool | numpy.ndarray: A bool for a single 1D point, and a 1D boolean array otherwise.
    """
    flags = contains_points(self.H, points, tol=tol)
    if np.ndim(points) == 1:
        return bool(flags[0])
    return flags
