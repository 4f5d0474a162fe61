# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test the interior point computation for halfspace systems

import numpy as np
import pytest

from pyhvpoly import HPolyhedron, find_interior

UNIT_CUBE_H = np.array(
    [
        [1, 0, 0, -1],
        [-1, 0, 0, 0],
        [0, 1, 0, -1],
        [0, -1, 0, 0],
        [0, 0, 1, -1],
        [0, 0, -1, 0],
    ],
    dtype=float,
)


def test_find_interior():
    interior, success = find_interior(UNIT_CUBE_H)
    assert success
    assert np.all((interior > 0) & (interior < 1))
    assert np.allclose(interior, [0.5, 0.5, 0.5], atol=1e-5)

    # Scaling rows does not change the halfspaces, and does not change the point
    scaled_H = UNIT_CUBE_H * np.array([[1], [20], [0.1], [3], [7], [0.5]])
    scaled_interior, success = find_interior(scaled_H)
    assert success
    assert np.allclose(scaled_interior, interior, atol=1e-5)

    # Shifted and stretched box [2, 6] x [-1, 1] x [0, 10] --- narrowest side decides the shift
    P = HPolyhedron(lb=[2, -1, 0], ub=[6, 1, 10])
    interior, success = find_interior(P.H)
    assert success
    assert np.all(P.A @ interior - P.b < -0.9)

    # Tetrahedron
    H_tetra = np.array([[-1, 0, 0, 0], [0, -1, 0, 0], [0, 0, -1, 0], [1, 1, 1, -1]])
    interior, success = find_interior(H_tetra)
    assert success
    assert np.all(H_tetra[:, :3] @ interior + H_tetra[:, 3] < 0)


def test_find_interior_failure():
    # x <= 0 and x >= 1
    interior, success = find_interior([[1, 0, 0, 0], [-1, 0, 0, 1]])
    assert not success
    assert interior.shape == (3,)

    # Empty box
    _, success = find_interior(HPolyhedron(lb=[1, 1, 1], ub=[0, 0, 0]).H)
    assert not success

    # Single halfspace leads to an unbounded shift LP
    interior, success = find_interior([[1, 0, 0, -1]])
    assert not success
    assert np.isnan(interior).all()

    with pytest.raises(ValueError):
        find_interior([[1, 0, 0]])


def test_find_interior_with_zero_rows():
    # 0 <= 1 is always satisfied and is skipped
    with pytest.warns(UserWarning, match="Skipped some rows"):
        interior, success = find_interior(np.vstack((UNIT_CUBE_H, [0, 0, 0, -1])))
    assert success
    assert np.allclose(interior, [0.5, 0.5, 0.5], atol=1e-5)

    # 1 <= 0 is never satisfied
    _, success = find_interior(np.vstack((UNIT_CUBE_H, [0, 0, 0, 1])))
    assert not success

    with pytest.warns(UserWarning, match="Skipped some rows"):
        _, success = find_interior([[0, 0, 0, -1]])
    assert not success


def test_interior_point():
    P1 = HPolyhedron(c=[1, 2, 3], h=0.5)
    assert np.allclose(P1.interior_point(), [1, 2, 3], atol=1e-5)
    interior, success = P1.find_interior()
    assert success
    assert np.allclose(interior, P1.interior_point())
    assert P1.interior_point() in P1

    P2 = HPolyhedron(lb=[1, 1, 1], ub=[0, 0, 0])
    with pytest.raises(ValueError):
        P2.interior_point()
