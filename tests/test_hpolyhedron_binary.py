# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose: Test the HPolyhedron class methods for binary operations (overlap, intersection, containment)

import itertools

import numpy as np
import pytest

from pyhvpoly import HPolyhedron, contains_points, intersection, overlaps


def test_overlaps():
    P_0 = HPolyhedron(lb=[0, 0, 0], ub=[1, 1, 1])
    P_half = HPolyhedron(lb=[0.5, 0.5, 0.5], ub=[1.5, 1.5, 1.5])
    P_far = HPolyhedron(lb=[2, 2, 2], ub=[3, 3, 3])
    P_face = HPolyhedron(lb=[1, 0, 0], ub=[2, 1, 1])
    P_corner = HPolyhedron(lb=[1, 1, 1], ub=[2, 2, 2])
    assert overlaps(P_0.H, P_half.H)
    assert not overlaps(P_0.H, P_far.H)
    assert not overlaps(P_0.H, P_face.H, eps=1e-6)
    assert not overlaps(P_0.H, P_corner.H)
    # Overlap of a polyhedron with itself
    assert overlaps(P_0.H, P_0.H)
    # Overlap of a thin slab is decided by the margin eps
    P_thin = HPolyhedron(lb=[0.9999, 0, 0], ub=[2, 1, 1])
    assert overlaps(P_0.H, P_thin.H, eps=1e-6)
    assert not overlaps(P_0.H, P_thin.H, eps=1e-3)

    # Symmetry
    all_polyhedra = [P_0, P_half, P_far, P_face, P_corner, P_thin]
    for P, Q in itertools.combinations(all_polyhedra, 2):
        assert overlaps(P.H, Q.H) == overlaps(Q.H, P.H)

    # Methods
    assert P_0.overlaps(P_half)
    assert P_0.overlaps(P_half.H)
    assert not P_0.overlaps(P_face)

    with pytest.raises(ValueError):
        overlaps(P_0.H, P_half.H[:, :3])


def test_overlaps_infeasible_or_unbounded():
    # Single halfspaces on both sides leave the shift LP unbounded
    assert not overlaps([[1, 0, 0, -1]], [[0, 1, 0, -1]])
    # Empty polyhedron does not overlap with anything
    P_empty = HPolyhedron(lb=[1, 1, 1], ub=[0, 0, 0])
    assert not overlaps(P_empty.H, HPolyhedron(lb=[-5, -5, -5], ub=[5, 5, 5]).H)


def test_intersection():
    P_0 = HPolyhedron(lb=[0, 0, 0], ub=[1, 1, 1])
    P_half = HPolyhedron(lb=[0.5, 0.5, 0.5], ub=[1.5, 1.5, 1.5])
    H = intersection(P_0.H, P_half.H)
    assert H.shape == (12, 4)
    assert np.allclose(H[:6], P_0.H)
    assert np.allclose(H[6:], P_half.H)

    P_int = P_0.intersection(P_half)
    assert P_int.n_halfspaces == 12
    assert np.allclose(P_int.interior_point(), [0.75, 0.75, 0.75], atol=1e-5)
    P_int.minimize_H_rep()
    assert P_int.n_halfspaces == 6

    P_far = HPolyhedron(lb=[2, 2, 2], ub=[3, 3, 3])
    assert P_0.intersection(P_far.H).is_empty


def test_contains():
    P = HPolyhedron(lb=[0, 0, 0], ub=[1, 1, 1])
    points = np.array([[0.5, 0.5, 0.5], [1, 1, 1], [1.1, 0.5, 0.5], [-0.5, 0, 0]])
    assert np.array_equal(contains_points(P.H, points), [True, True, False, False])
    assert np.array_equal(P.contains(points), [True, True, False, False])
    assert P.contains([0.2, 0.3, 0.4]) is True
    assert [0.2, 0.3, 0.4] in P
    assert [2, 0.3, 0.4] not in P
    assert not contains_points(P.H, [1 + 1e-3, 0, 0], tol=1e-6)[0]
    assert contains_points(P.H, [1 + 1e-3, 0, 0], tol=1e-2)[0]
