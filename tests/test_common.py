# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test methods common to the halfspace and vertex representations

import cvxpy as cp
import numpy as np
import pytest

from pyhvpoly import HPolyhedron, find_interior, is_hpolyhedron
from pyhvpoly.common import (
    check_matrices_are_equal_ignoring_row_order,
    sanitize_h_poly,
    sanitize_point,
    sanitize_points,
    solve_lp,
)


def test_sanitize_h_poly():
    H = sanitize_h_poly([1, 0, 0, -1])
    assert H.shape == (1, 4)
    assert H.dtype == float
    H = sanitize_h_poly([[1, 0, 0, -1], [-1, 0, 0, 0]])
    assert H.shape == (2, 4)
    with pytest.raises(ValueError):
        sanitize_h_poly([[1, 0, 0], [-1, 0, 0]])
    with pytest.raises(ValueError):
        sanitize_h_poly(np.empty((0, 4)))
    with pytest.raises(ValueError):
        sanitize_h_poly([[1, 0, np.nan, -1]])
    with pytest.raises(ValueError):
        sanitize_h_poly([[1, 0, 0, np.inf]])
    with pytest.raises(ValueError):
        sanitize_h_poly([["a", 0, 0, 1]])
    with pytest.raises(ValueError):
        sanitize_h_poly(np.ones((2, 4, 1)))


def test_sanitize_points():
    V = sanitize_points([1, 2, 3])
    assert V.shape == (1, 3)
    V = sanitize_points([[1, 2, 3], [4, 5, 6]])
    assert V.shape == (2, 3)
    assert sanitize_points([]).shape == (0, 3)
    with pytest.raises(ValueError):
        sanitize_points([[1, 2], [3, 4]])
    with pytest.raises(ValueError):
        sanitize_points([[1, 2, np.inf]])
    with pytest.raises(ValueError):
        sanitize_points([1, 2, 3, 4])

    x = sanitize_point([[1], [2], [3]])
    assert x.shape == (3,)
    with pytest.raises(ValueError):
        sanitize_point([1, 2])
    with pytest.raises(ValueError):
        sanitize_point([1, 2, np.nan])


def test_solve_lp():
    # Bounded LP: minimize x + y over the box [1, 2]^2
    A = np.vstack((np.eye(2), -np.eye(2)))
    b = np.array([2, 2, -1, -1])
    x, value = solve_lp([1, 1], A, b)
    assert np.allclose(x, [1, 1], atol=1e-5)
    assert np.isclose(value, 2, atol=1e-5)

    # Infeasible LP: x <= 0 and x >= 1
    x, value = solve_lp([1], [[1], [-1]], [0, -1])
    assert np.isnan(x).all()
    assert value == np.inf

    # Unbounded LP: minimize x subject to x <= 1
    x, value = solve_lp([1], [[1]], [1])
    assert np.isnan(x).all()
    assert value == -np.inf

    with pytest.raises(NotImplementedError):
        solve_lp([1, 1], A, b, cvxpy_args={"solver": "WRONG_SOLVER"})


def test_solve_lp_combined_and_unhandled_status(monkeypatch):
    A = np.vstack((np.eye(2), -np.eye(2)))
    b = np.array([2, 2, -1, -1])
    monkeypatch.setattr(cp.Problem, "solve", lambda self, **kwargs: None)
    # Solvers like GUROBI may not distinguish infeasibility from unboundedness
    monkeypatch.setattr(cp.Problem, "status", property(lambda self: cp.settings.INFEASIBLE_OR_UNBOUNDED))
    x, value = solve_lp([1, 1], A, b)
    assert np.isnan(x).all()
    assert value == np.inf
    assert not find_interior(HPolyhedron(lb=[0, 0, 0], ub=[1, 1, 1]).H)[1]

    monkeypatch.setattr(cp.Problem, "status", property(lambda self: "some_unknown_status"))
    with pytest.raises(NotImplementedError):
        solve_lp([1, 1], A, b)


def test_check_matrices_are_equal_ignoring_row_order():
    A = np.array([[1, 2, 3], [4, 5, 6]])
    assert check_matrices_are_equal_ignoring_row_order(A, A[::-1, :])
    assert not check_matrices_are_equal_ignoring_row_order(A, A[:1, :])
    assert not check_matrices_are_equal_ignoring_row_order(A, A + 1)


def test_is_hpolyhedron():
    assert is_hpolyhedron(HPolyhedron(lb=[0, 0, 0], ub=[1, 1, 1]))
    assert not is_hpolyhedron(np.eye(3))
