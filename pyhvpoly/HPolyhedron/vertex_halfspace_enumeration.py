# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the methods for vertex-halfspace enumeration of 3D polyhedra
# Coverage: The RuntimeError branches handle unexpected errors from pycddlib.

import cdd  # pycddlib -- for halfspace enumeration from V-representation
import numpy as np
from scipy.spatial import ConvexHull, QhullError  # qhull -- for vertex enumeration via polar duality

from pyhvpoly.common import sanitize_h_poly, sanitize_point, sanitize_points
from pyhvpoly.common.constants import PYHVPOLY_EPS, PYHVPOLY_ZERO_NORMAL, QHULL_DEFAULT_EPS
from pyhvpoly.HPolyhedron.operations_unary import find_interior


def filter_vertices(V, eps=PYHVPOLY_EPS):
    r"""Remove near-duplicate points by quantizing them on a grid.

    Args:
        V (array_like): Points arranged row-wise (N times 3)
        eps (float, optional): Absolute grid size for merging, floored at mag times the machine epsilon. Defaults to
            PYHVPOLY_EPS.

    Returns:
        numpy.ndarray: Filtered points (K times 3) in the order of their first occurrence

    Notes:
        The grid resolution is :math:`\text{res} = \text{mag} \max(|\epsilon| / \text{mag}, \epsilon_\text{machine})`,
        i.e., :math:`\max(|\epsilon|, \text{mag}\ \epsilon_\text{machine})`, where mag is the largest absolute
        coordinate in V. Every point is mapped to the integer key
        round(p / res), and only the first point of every key is kept. When V is all zeros, the first point is
        returned.
    """
    V = sanitize_points(V)
    if V.shape[0] == 0:
        return V.copy()
    mag = np.max(np.abs(V))
    if mag == 0:
        return V[:1, :].copy()
    res = mag * max(abs(eps) / mag, np.finfo(float).eps)
    scaled_V = V / res
    # Round half away from zero
    quantized_V = np.sign(scaled_V) * np.floor(np.abs(scaled_V) + 0.5)
    # np.unique sorts the keys lexicographically and reports the first index of each key
    _, first_occurrence = np.unique(quantized_V, axis=0, return_index=True)
    return V[np.sort(first_occurrence), :]


def enumerate_vertices(h_poly, interior=None, eps=PYHVPOLY_EPS, cvxpy_args=None):
    r"""Enumerate the vertices of a bounded polyhedron given by its halfspace system.

    Args:
        h_poly (array_like): Halfspace system of shape (m, 4). Each row [a, b, c, d] encodes a x + b y + c z + d <= 0.
        interior (array_like, optional): Point strictly inside the polyhedron. Defaults to None, in which case
            :meth:`find_interior` is used to compute one.
        eps (float, optional): Vertex merge tolerance. Defaults to PYHVPOLY_EPS.
        cvxpy_args (dict, optional): CVXPY arguments used by :meth:`find_interior`. Defaults to None.

    Raises:
        ValueError: When h_poly or interior are not valid

    Returns:
        tuple: A tuple with two items
            #. V (numpy.ndarray): Vertices arranged row-wise (n_vertices times 3). Empty (0 times 3) on failure.
            #. success (bool): False when no interior point was found, when the provided interior point is not strictly
               inside, when qhull fails to construct the dual hull, or when the polyhedron is unbounded.

    Notes:
        We use polar duality with respect to the interior point :math:`c`. Each halfspace :math:`n_i^\top x + d_i \leq
        0` becomes the dual point :math:`n_i / b_i'` with :math:`b_i' = -d_i - n_i^\top c > 0`. Each facet of the
        convex hull of the dual points corresponds to a vertex of the polyhedron. For a triangular facet :math:`(p_0,
        p_1, p_2)` with :math:`\nu = (p_1 - p_0) \times (p_2 - p_1)`, the vertex is :math:`\nu / (\nu^\top p_1) + c`.
        The ratio does not depend on the winding of the facet, and therefore on the orientation convention of qhull.

        Coplanar dual facets are split into several triangles by qhull, and yield the same vertex several times. We
        merge them with :meth:`filter_vertices`.

        The polyhedron is bounded if and only if the origin lies strictly inside the convex hull of the dual points.
        Otherwise, the call fails.
    """
    h_poly = sanitize_h_poly(h_poly)
    if interior is None:
        interior, success = find_interior(h_poly, cvxpy_args=cvxpy_args)
        if not success:
            return np.empty((0, 3)), False
    else:
        interior = sanitize_point(interior)

    # Translate so that interior is the origin
    b = -h_poly[:, 3] - h_poly[:, :3] @ interior
    if (b <= 0).any():
        return np.empty((0, 3)), False
    dual_points = h_poly[:, :3] / b[:, np.newaxis]

    qhull_eps = min(eps, QHULL_DEFAULT_EPS)
    try:
        hull = ConvexHull(dual_points, qhull_options=f"Qt C-{qhull_eps:.1e}")
    except (QhullError, ValueError):
        # Degenerate dual point cloud, typically from an unbounded or ill-conditioned halfspace system
        return np.empty((0, 3)), False

    scale = np.max(np.abs(dual_points))
    if not (hull.equations[:, 3] < -PYHVPOLY_ZERO_NORMAL * scale).all():
        # Origin not strictly inside the dual hull, i.e., the polyhedron is unbounded
        return np.empty((0, 3)), False

    simplices = hull.simplices
    point = dual_points[simplices[:, 1], :]
    edge0 = point - dual_points[simplices[:, 0], :]
    edge1 = dual_points[simplices[:, 2], :] - point
    normal = np.cross(edge0, edge1)
    # Triangulation of merged facets may leave zero-area triangles. Use the facet hyperplane for those.
    degenerate = np.linalg.norm(normal, axis=1) <= PYHVPOLY_ZERO_NORMAL * scale**2
    normal[degenerate, :] = hull.equations[degenerate, :3]
    denominator = np.sum(normal * point, axis=1)
    if (np.abs(denominator) <= PYHVPOLY_ZERO_NORMAL * scale * np.linalg.norm(normal, axis=1)).any():
        # A dual facet through the origin is a vertex at infinity, i.e., the polyhedron is unbounded
        return np.empty((0, 3)), False
    raw_V = normal / denominator[:, np.newaxis]

    V = filter_vertices(raw_V, eps) + interior
    return V, True


def get_cdd_polyhedron_from_V(V):
    """Get CDD polyhedron in generator form from given V

    Args:
        V (array_like): n_vertices times 3 matrix

    Returns:
        cdd.Polyhedron: CDD Polyhedron
    """
    n_vertices = V.shape[0]
    # t is 1 to indicate that all are vertices
    tV_list = np.hstack((np.ones((n_vertices, 1)), V)).tolist()
    tV_cdd = cdd.matrix_from_array(tV_list, rep_type=cdd.RepType.GENERATOR)
    try:
        return cdd.polyhedron_from_matrix(tV_cdd)
    except RuntimeError as err:
        raise ValueError("Computation of CDD polyhedron failed due to numerical inconsistency in vertex list") from err


def get_h_poly_from_cdd_matrix(H_cdd_matrix):
    """Get the halfspace system from a canonicalized CDD matrix in inequality form

    Args:
        H_cdd_matrix (cdd.Matrix): CDD matrix with rows [b, -A] encoding b - A x >= 0

    Raises:
        ValueError: When CDD identified equalities (polyhedron is not full-dimensional) or the list is empty

    Returns:
        numpy.ndarray: Halfspace system of shape (m, 4)
    """
    H_cdd_array = np.array(H_cdd_matrix.array)
    if H_cdd_array.size == 0:
        raise ValueError("Did not expect facet list to be empty after minimization!")
    elif len(H_cdd_matrix.lin_set):
        raise ValueError("Polyhedron is not full-dimensional!")
    b, A = H_cdd_array[:, 0], -H_cdd_array[:, 1:]
    return np.hstack((A, -b[:, np.newaxis]))


def halfspaces_from_vertices(V):
    """Compute the minimal halfspace system of the convex hull of the given vertices.

    Args:
        V (array_like): Points arranged row-wise (N times 3)

    Raises:
        ValueError: When the convex hull is not full-dimensional, or cdd fails.

    Returns:
        numpy.ndarray: Halfspace system of shape (m, 4)

    Notes:
        We use cdd for the halfspace enumeration. Redundant points are allowed in V.
    """
    V = sanitize_points(V)
    if V.shape[0] < 4:
        raise ValueError(f"Expected at least 4 vertices for a 3D polyhedron! Got {V.shape[0]:d}.")
    V_cdd = get_cdd_polyhedron_from_V(V)
    try:
        H_cdd_matrix = cdd.copy_inequalities(V_cdd)
        cdd.matrix_canonicalize(H_cdd_matrix)
    except RuntimeError as err:
        raise ValueError("Computation of H-rep failed!") from err
    return get_h_poly_from_cdd_matrix(H_cdd_matrix)


def minimize_h_poly(h_poly):
    """Remove any redundant halfspaces from the halfspace system using cdd.

    Args:
        h_poly (array_like): Halfspace system of shape (m, 4)

    Raises:
        ValueError: When minimal H-Rep computation fails OR polyhedron is not full-dimensional

    Returns:
        numpy.ndarray: Halfspace system of shape (k, 4) with k <= m
    """
    h_poly = sanitize_h_poly(h_poly)
    b_mA = np.hstack((-h_poly[:, 3:], -h_poly[:, :3]))
    H_cdd_matrix = cdd.matrix_from_array(b_mA.tolist(), rep_type=cdd.RepType.INEQUALITY)
    try:
        cdd.matrix_canonicalize(H_cdd_matrix)
    except RuntimeError as err:
        raise ValueError("Computation of minimal H-rep failed!") from err
    return get_h_poly_from_cdd_matrix(H_cdd_matrix)


def determine_V_rep(self, eps=PYHVPOLY_EPS):
    """Determine the vertex representation of the polyhedron.

    Args:
        eps (float, optional): Vertex merge tolerance. Defaults to PYHVPOLY_EPS.

    Raises:
        ValueError: When vertex enumeration fails. The polyhedron may be empty, lower-dimensional or unbounded.
    """
    V, success = enumerate_vertices(self.H, eps=eps, cvxpy_args=self.cvxpy_args_lp)
    if not success:
        raise ValueError("Computation of V-rep failed! Polyhedron may be empty, not full-dimensional, or unbounded.")
    self._V = V
    self._in_V_rep = True


def minimize_H_rep(self):
    """Remove any redundant halfspaces from the halfspace representation of the polyhedron using cdd.

    Raises:
        ValueError: When minimal H-Rep computation fails OR polyhedron has no interior
    """
    if not self.is_full_dimensional:
        raise ValueError("Can not minimize the H-rep of a polyhedron without interior!")
    self._H = minimize_h_poly(self.H)
