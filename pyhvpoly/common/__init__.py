# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose: Describe various methods that are common to the halfspace and vertex representations --- input
# sanitization, the linear programming oracle, and testing helpers.

import cvxpy as cp
import numpy as np

from pyhvpoly.common.constants import DEFAULT_CVXPY_ARGS_LP


def check_matrices_are_equal_ignoring_row_order(A, B):
    """Check matrices are equal while ignoring row order

    Args:
        A (array_like): Matrix 1
        B (array_like): Matrix 2

    Returns:
        bool: A == B

    Notes:
        isclose does element-wise comparison, all with axis=1, provides a row-wise test, and finally any checks for some
        row where row-wise match is true
    """
    A = np.array(A).astype(float)
    B = np.array(B).astype(float)
    return A.shape == B.shape and sum([np.any(np.all(np.isclose(row, B), axis=1)) for row in A]) == B.shape[0]


def is_hpolyhedron(Q):
    """Check if the set is a HPolyhedron

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set is a HPolyhedron, and False otherwise.
    """
    return hasattr(Q, "type_of_set") and Q.type_of_set == "HPolyhedron"


def sanitize_h_poly(h_poly):
    """Sanitize and check if `h_poly` is a valid halfspace system in 3D

    Args:
        h_poly (array_like): Can be numpy arrays, list, or tuples. Each row [a, b, c, d] encodes the halfspace
            a x + b y + c z + d <= 0.

    Raises:
        ValueError: h_poly is not convertible to a float array
        ValueError: h_poly is not a 2D array with 4 columns and at least one row
        ValueError: h_poly has NaNs or inf

    Returns:
        numpy.ndarray: 2D numpy array of shape (m, 4) that is sanitized for `h_poly`
    """
    try:
        h_poly = np.atleast_2d(h_poly).astype(float)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Can not convert h_poly into a float array. Got {h_poly!s}") from err
    if h_poly.ndim != 2 or h_poly.shape[1] != 4:
        raise ValueError(f"Expected h_poly to be a 2D array with 4 columns! Got {np.array2string(h_poly):s}")
    elif h_poly.shape[0] == 0:
        raise ValueError("Expected h_poly to have at least one halfspace!")
    elif np.any(np.isnan(h_poly)):
        raise ValueError(f"Expected h_poly to be free from NaNs. Got {np.array2string(h_poly):s}")
    elif np.any(np.isinf(h_poly)):
        raise ValueError(f"Expected h_poly to be free from inf. Got {np.array2string(h_poly):s}")
    return h_poly


def sanitize_points(V):
    """Sanitize and check if `V` is a valid list of 3D points arranged row-wise

    Args:
        V (array_like): Can be numpy arrays, list, or tuples. A single point (1D, length 3) is also accepted.

    Raises:
        ValueError: V is not convertible to a float array
        ValueError: V is not a 2D array with 3 columns
        ValueError: V has NaNs or inf

    Returns:
        numpy.ndarray: 2D numpy array of shape (N, 3)
    """
    try:
        V = np.array(V).astype(float)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Can not convert V into a float array. Got {np.array2string(np.array(V)):s}") from err
    if V.ndim == 1 and V.shape[0] == 3:
        V = V[np.newaxis, :]
    elif V.ndim == 1 and V.shape[0] == 0:
        V = np.empty((0, 3))
    if V.ndim != 2 or V.shape[1] != 3:
        raise ValueError(f"Expected V to be a 2D array with 3 columns! Got {np.array2string(V):s}")
    elif not np.all(np.isfinite(V)):
        raise ValueError(f"Expected V to be free from NaNs and inf. Got {np.array2string(V):s}")
    return V


def sanitize_point(x):
    """Sanitize and check if `x` is a valid 3D point

    Args:
        x (array_like): Can be numpy arrays, list, or tuples

    Raises:
        ValueError: x is not a finite 3-dimensional vector

    Returns:
        numpy.ndarray: 1D numpy array of shape (3,)
    """
    try:
        x = np.atleast_1d(np.squeeze(x)).astype(float)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Can not convert the point into a float array. Got {np.array2string(np.array(x)):s}") from err
    if x.shape != (3,) or not np.all(np.isfinite(x)):
        raise ValueError(f"Expected a finite 3-dimensional point! Got {np.array2string(x):s}")
    return x


def solve_lp(c, A, b, cvxpy_args=None, task_str=""):
    """Solve the linear program minimize c^T x subject to A x <= b.

    Args:
        c (array_like): Objective coefficient vector of length n
        A (array_like): Constraint matrix of shape (m, n)
        b (array_like): Right-hand side vector of length m
        cvxpy_args (dict, optional): CVXPY arguments to be passed to the solver. Defaults to None, in which case
            DEFAULT_CVXPY_ARGS_LP from pyhvpoly.common.constants is used.
        task_str (str, optional): Task string to be used in error messages. Defaults to ''.

    Raises:
        NotImplementedError: Unable to solve problem using CVXPY

    Returns:
        tuple: A tuple with two items:
            #. x (numpy.ndarray): Optimal value of x. np.nan * np.ones((n,)) if the problem is not solved.
            #. value (float): Optimal value of the linear program. np.inf if the problem is infeasible (or the solver
               reports infeasible or unbounded), -np.inf if problem is unbounded, and finite otherwise.

    Notes:
        Infeasibility and unboundedness are reported through the returned value, and never raised. Callers must check
        np.isfinite(value) before using x.
    """
    if cvxpy_args is None:
        cvxpy_args = DEFAULT_CVXPY_ARGS_LP
    c = np.atleast_1d(np.squeeze(c)).astype(float)
    A = np.atleast_2d(A).astype(float)
    b = np.atleast_1d(np.squeeze(b)).astype(float)
    x = cp.Variable((c.shape[0],))
    problem = cp.Problem(cp.Minimize(c @ x), [A @ x <= b])
    try:
        problem.solve(**cvxpy_args)
    except cp.error.SolverError as err:
        raise NotImplementedError(f"Unable to solve the task ({task_str:s}). CVXPY returned error: {str(err)}") from err
    if problem.status in [cp.OPTIMAL, cp.OPTIMAL_INACCURATE]:
        return x.value, float(problem.value)
    elif problem.status in [cp.UNBOUNDED, cp.UNBOUNDED_INACCURATE]:
        return np.nan * np.ones((c.shape[0],)), -np.inf
    elif problem.status in [cp.INFEASIBLE, cp.INFEASIBLE_INACCURATE]:
        return np.nan * np.ones((c.shape[0],)), np.inf
    elif problem.status == cp.settings.INFEASIBLE_OR_UNBOUNDED:
        # Reported by some solvers (e.g., GUROBI) without telling the two apart. Either way, there is no optimum.
        return np.nan * np.ones((c.shape[0],)), np.inf
    else:
        # Should never happen!
        raise NotImplementedError(
            f"Could not solve the task ({task_str:s}), due to an unhandled status: {problem.status:s}."
        )
