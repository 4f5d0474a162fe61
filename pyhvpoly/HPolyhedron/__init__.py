# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the HPolyhedron class

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence, overload

import numpy as np

from pyhvpoly.common import sanitize_h_poly
from pyhvpoly.common.constants import DEFAULT_CVXPY_ARGS_LP
from pyhvpoly.HPolyhedron.operations_binary import (
    polyhedron_contains,
    polyhedron_intersection,
    polyhedron_overlaps,
)
from pyhvpoly.HPolyhedron.operations_unary import find_interior, interior_point
from pyhvpoly.HPolyhedron.plotting_scripts import plot
from pyhvpoly.HPolyhedron.vertex_halfspace_enumeration import (
    determine_V_rep,
    halfspaces_from_vertices,
    minimize_H_rep,
)


class HPolyhedron:
    r"""HPolyhedron class for 3D convex polyhedra.

    HPolyhedron object construction admits **one** of the following combinations (as keyword arguments):

    #. H for a polyhedron in **halfspace representation** :math:`\{x\ |\ H_{:, :3} x + H_{:, 3} \leq 0\}`, where each
       row [a, b, c, d] of H encodes the halfspace :math:`a x + b y + c z + d \leq 0`,
    #. (A, b) for a polyhedron :math:`\{x\ |\ Ax \leq b\}`,
    #. V for the **convex hull of the vertices** in V (rows of V are the points), converted to halfspaces with cdd,
    #. (lb, ub) for an **axis-aligned cuboid** :math:`\{x\ |\ lb\leq x \leq ub\}`, and
    #. (c, h) for an **axis-aligned cuboid** centered at c with specified scalar/vector half-sides :math:`h`.

    Args:
        H (Sequence[Sequence[float]] | np.ndarray, optional): Halfspace system of shape (m, 4).
        A (Sequence[Sequence[float]] | np.ndarray, optional): Inequality coefficient vectors of shape (m, 3). When A is
            provided, b must also be provided.
        b (Sequence[float] | np.ndarray, optional): Inequality constants of length m. When b is provided, A must also
            be provided.
        V (Sequence[Sequence[float]] | np.ndarray, optional): Points arranged row-wise (N times 3).
        lb (Sequence[float] | np.ndarray, optional): Lower bounds of the axis-aligned cuboid (length 3).
        ub (Sequence[float] | np.ndarray, optional): Upper bounds of the axis-aligned cuboid (length 3).
        c (Sequence[float] | np.ndarray, optional): Center of the axis-aligned cuboid (length 3).
        h (float | Sequence[float] | np.ndarray, optional): Half-side length of the axis-aligned cuboid. Can be a scalar
            or a vector of length 3.

    Raises:
        ValueError: When arguments provided is not one of [H, (A, b), V, (lb, ub), (c, h)]
        ValueError: Errors raised by issues with the arguments --- mismatch in dimensions, not convertible to
            appropriately-dimensioned numpy arrays, etc.

    Notes:
        The halfspace system is stored as provided. It may describe an empty, lower-dimensional, or unbounded set.
        Use :attr:`is_full_dimensional` to check for a non-empty interior before relying on vertex enumeration.
    """

    if TYPE_CHECKING:

        @overload
        def __init__(self, *, H: Sequence[Sequence[float]] | np.ndarray) -> None: ...

        @overload
        def __init__(
            self,
            *,
            A: Sequence[Sequence[float]] | np.ndarray,
            b: Sequence[float] | np.ndarray,
        ) -> None: ...

        @overload
        def __init__(self, *, V: Sequence[Sequence[float]] | np.ndarray) -> None: ...

        @overload
        def __init__(
            self,
            *,
            lb: Sequence[float] | np.ndarray,
            ub: Sequence[float] | np.ndarray,
        ) -> None: ...

        @overload
        def __init__(
            self,
            *,
            c: Sequence[float] | np.ndarray,
            h: float | Sequence[float] | np.ndarray,
        ) -> None: ...

    def __init__(self, **kwargs: Any) -> None:
        """Constructor for HPolyhedron class."""
        self._type_of_set: str = "HPolyhedron"
        self._H = np.empty((0, 4))
        self._V = np.empty((0, 3))
        self._in_V_rep: bool = False
        self._cvxpy_args_lp = DEFAULT_CVXPY_ARGS_LP

        if "H" in kwargs:
            if len(kwargs) != 1:
                raise ValueError("Cannot set halfspaces H with other arguments")
            self._H = sanitize_h_poly(kwargs.get("H"))
        elif all(k in kwargs for k in ("A", "b")):
            if len(kwargs) != 2:
                raise ValueError("Cannot set (A, b) with other arguments")
            self._set_attributes_from_Ab(kwargs.get("A"), kwargs.get("b"))
        elif "V" in kwargs:
            if len(kwargs) != 1:
                raise ValueError("Cannot set vertices V with other arguments")
            self._H = halfspaces_from_vertices(kwargs.get("V"))
        elif all(k in kwargs for k in ("lb", "ub")):
            if len(kwargs) != 2:
                raise ValueError("Cannot set bounds (lb, ub) with other arguments")
            self._set_attributes_from_bounds(kwargs.get("lb"), kwargs.get("ub"))
        elif all(k in kwargs for k in ("c", "h")):
            if len(kwargs) != 2:
                raise ValueError("Cannot set up HPolyhedron from (c, h) with other arguments")
            try:
                c = np.atleast_1d(np.squeeze(kwargs.get("c"))).astype(float)
                h = np.squeeze(kwargs.get("h")).astype(float)
            except (TypeError, ValueError) as err:
                raise ValueError(
                    "Expected c and h to be convertible into a numpy 1D array and scalar/1D array of "
                    f"float respectively! Got c: {np.array2string(np.array(kwargs.get('c')))} and "
                    f"h: {np.array2string(np.array(kwargs.get('h')))}"
                ) from err
            if h.ndim >= 2:
                raise ValueError(
                    "Expected h to be a 0-dimensional or 1-dimensional array-like object "
                    f"Got {np.array2string(np.array(h))}."
                )
            elif h.ndim == 1 and h.shape != c.shape:
                raise ValueError(f"Expected c and 1-dimensional h to match in dimensions. Got {c.shape} and {h.shape}")
            self._set_attributes_from_bounds(c - h, c + h)
        else:
            raise ValueError(
                "Got invalid arguments while defining a polyhedron. Please specify either H or (A, b) or V or "
                "(lb, ub) or (c, h)."
            )

    @property
    def type_of_set(self) -> str:
        """Return the type of set

        Returns:
            str: Type of the set
        """
        return self._type_of_set

    def _set_attributes_from_Ab(
        self,
        A: Optional[Sequence[Sequence[float]] | np.ndarray | None],
        b: Optional[Sequence[float] | np.ndarray | None],
    ) -> None:
        """Protected method to set _H given (A, b) describing Ax <= b

        Raises:
            ValueError: When (A, b) is not a valid system of linear inequalities in 3D
        """
        try:
            A = np.atleast_2d(A).astype(float)
            b = np.atleast_1d(np.squeeze(b)).astype(float)
        except (TypeError, ValueError) as err:
            raise ValueError(
                f"Can not convert A, b into float arrays. Got {np.array2string(np.array(A))} and "
                f"{np.array2string(np.array(b))}"
            ) from err
        if A.ndim != 2 or A.shape[1] != 3 or b.ndim != 1:
            raise ValueError(f"Expected A, b to be a 2D array with 3 columns and a 1D array! Got {A.shape}, {b.shape}")
        elif A.shape[0] != b.shape[0]:
            raise ValueError(f"A and b has different number of rows! A: {A.shape[0]:d} and b: {b.shape[0]:d}.")
        self._H = sanitize_h_poly(np.hstack((A, -b[:, np.newaxis])))

    def _set_attributes_from_bounds(self, lb: Any, ub: Any) -> None:
        """Protected method to set _H given (lb, ub) of an axis-aligned box

        Raises:
            ValueError: When lb, ub is not 1D array of length 3
        """
        try:
            lb = np.atleast_1d(np.squeeze(lb)).astype(float)
            ub = np.atleast_1d(np.squeeze(ub)).astype(float)
        except (TypeError, ValueError) as err:
            raise ValueError(
                f"Expected lb, ub to be convertible into float arrays. Got {np.array2string(np.array(lb))} and "
                f"{np.array2string(np.array(ub))}"
            ) from err
        if lb.shape != (3,) or ub.shape != (3,):
            raise ValueError(f"Expected lb, ub to be 1D arrays of length 3! Got {lb.shape} and {ub.shape}")
        A = np.vstack((np.eye(3), -np.eye(3)))
        b = np.hstack((ub, -lb))
        self._set_attributes_from_Ab(A, b)

    @property
    def dim(self) -> int:
        """Dimension of the polyhedron (always 3)"""
        return 3

    @property
    def H(self) -> np.ndarray:
        """Halfspace system of shape (m, 4). Each row [a, b, c, d] encodes a x + b y + c z + d <= 0."""
        return self._H

    @property
    def A(self) -> np.ndarray:
        """Inequality coefficient vectors A for the polyhedron {A x <= b}"""
        return self._H[:, :3]

    @property
    def b(self) -> np.ndarray:
        """Inequality constants b for the polyhedron {A x <= b}"""
        return -self._H[:, 3]

    @property
    def n_halfspaces(self) -> int:
        """Number of halfspaces"""
        return self._H.shape[0]

    @property
    def V(self) -> np.ndarray:
        """Vertices of the polyhedron arranged row-wise. A vertex enumeration is performed if not yet in V-Rep.

        Raises:
            ValueError: When vertex enumeration fails
        """
        if not self.in_V_rep:
            self.determine_V_rep()
        return self._V

    @property
    def n_vertices(self) -> int:
        """Number of vertices"""
        return self.V.shape[0]

    @property
    def in_V_rep(self) -> bool:
        """Check if the polyhedron has its vertex representation computed"""
        return self._in_V_rep

    @property
    def is_full_dimensional(self) -> bool:
        """Check if the polyhedron has a non-empty interior"""
        return find_interior(self.H, cvxpy_args=self.cvxpy_args_lp)[1]

    @property
    def is_empty(self) -> bool:
        """Check if the polyhedron has no interior. Lower-dimensional sets are reported as empty."""
        return not self.is_full_dimensional

    @property
    def cvxpy_args_lp(self) -> dict[str, Any]:
        """CVXPY arguments in use when solving a linear program

        Returns:
            dict: CVXPY arguments in use when solving a linear program. Defaults to dictionary in
            `pyhvpoly.common.constants.DEFAULT_CVXPY_ARGS_LP`.
        """
        return self._cvxpy_args_lp

    @cvxpy_args_lp.setter
    def cvxpy_args_lp(self, value: dict[str, Any]) -> None:
        self._cvxpy_args_lp = value

    def find_interior(self) -> tuple[np.ndarray, bool]:
        """Find a point strictly inside the polyhedron. See :meth:`pyhvpoly.find_interior` for details."""
        return find_interior(self.H, cvxpy_args=self.cvxpy_args_lp)

    def copy(self) -> HPolyhedron:
        """Create a copy of the polyhedron"""
        new_polyhedron = self.__class__(H=self.H.copy())
        new_polyhedron.cvxpy_args_lp = self.cvxpy_args_lp
        if self.in_V_rep:
            new_polyhedron._V = self._V.copy()
            new_polyhedron._in_V_rep = True
        return new_polyhedron

    def __contains__(self, point: Any) -> bool:
        return bool(self.contains(np.atleast_1d(np.squeeze(point))))

    def __str__(self) -> str:
        return f"Polyhedron in R^3 with {self.n_halfspaces:d} halfspaces"

    def __repr__(self) -> str:
        repr_str = [str(self)]
        if self.in_V_rep:
            repr_str += [f"\tand {self._V.shape[0]:d} vertices"]
        return "\n".join(repr_str)

    # Unary operations
    interior_point = interior_point
    determine_V_rep = determine_V_rep
    minimize_H_rep = minimize_H_rep

    # Binary operations
    overlaps = polyhedron_overlaps
    intersection = polyhedron_intersection
    contains = polyhedron_contains

    # Plotting
    plot = plot
