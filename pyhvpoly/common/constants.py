# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Specify the constants to be used with cvxpy and qhull when solving the problems, as well as testing
# workflows

PYHVPOLY_EPS = 1e-6  # Default tolerance for overlap margin and vertex merging
PYHVPOLY_ZERO = 1e-6  # Zero threshold for containment and face incidence
PYHVPOLY_ZERO_NORMAL = 1e-12  # Halfspace normals (and dual facet cross products) below this norm are treated as zero

# Smallest merge tolerance handed to qhull. The effective value is min(eps, QHULL_DEFAULT_EPS).
QHULL_DEFAULT_EPS = 1e-7

# Solvers used by default
DEFAULT_LP_SOLVER_STR = "CLARABEL"  # CLARABEL, MOSEK, CVXOPT, SCS, ECOS, GUROBI, OSQP

# CVXPY args used by default
DEFAULT_CVXPY_ARGS_LP = {"solver": DEFAULT_LP_SOLVER_STR}

# Testing workflow constants
TESTING_SHOW_PLOTS = False

# Plotting constants for polyhedra
DEFAULT_PATCH_ARGS_3D = {"edgecolor": "k", "facecolor": None}
DEFAULT_VERTEX_ARGS = {"visible": False, "s": 30, "marker": "o", "color": "k"}
DEFAULT_PATH_ARGS = {"color": "r", "marker": "o"}
