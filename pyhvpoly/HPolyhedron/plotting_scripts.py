# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the plotting methods for the HPolyhedron class and for corridors of polyhedra

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any, Optional, Sequence, cast

if TYPE_CHECKING:
    from pyhvpoly.HPolyhedron import HPolyhedron

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection
from mpl_toolkits.mplot3d.axes3d import Axes3D
from scipy.spatial.transform import Rotation

from pyhvpoly.common import is_hpolyhedron, sanitize_points
from pyhvpoly.common.constants import DEFAULT_PATCH_ARGS_3D, DEFAULT_PATH_ARGS, DEFAULT_VERTEX_ARGS, PYHVPOLY_ZERO
from pyhvpoly.HPolyhedron.vertex_halfspace_enumeration import enumerate_vertices


def plot(
    self: "HPolyhedron",
    ax: Optional[Axes3D | None] = None,
    patch_args: Optional[dict[str, Any]] = None,
    vertex_args: Optional[dict[str, Any]] = None,
    enable_warning: bool = True,
) -> tuple[Any, Any, Any]:
    """Plot a 3D polyhedron using matplotlib's Line3DCollection.

    Args:
        ax (Axes3D | None, optional): Axes to plot. Defaults to None, in which case a new axes is created. The
            function assumes that the provided axes was defined with projection='3d'.
        patch_args (dict, optional): Arguments to pass for plotting faces and edges. See [Matplotlib-Line3DCollection]_
            for options for patch_args. Defaults to None, in which case we plot black edges without face colors.
        vertex_args (dict, optional): Arguments to pass for plotting vertices. See [Matplotlib-Axes3D.scatter]_ for
            options for vertex_args. Defaults to None, in which case we skip plotting the vertices.
        enable_warning (bool, optional): Enables the UserWarning. May be turned off if expected. Defaults to True.

    Raises:
        UserWarning: When an empty (no interior) or an unbounded polyhedron is provided, or when all faces have less
            than 3 vertices

    Returns:
        (axes, handle, handle): Tuple with axes containing the polyhedron, handle for plotting first patch, handle for
        plotting vertices

    Notes:
        - This function performs a vertex enumeration if the polyhedron is not yet in V-Rep. Unbounded polyhedra are not
          plotted.
        - We iterate over each halfspace, collect the vertices lying on it, rotate them about their centroid so that
          the halfspace is now parallel to XY plane, sort them in counter-clockwise direction, and plot the face using
          matplotlib's Line3DCollection.
        - When label is passed in patch_args, the label is only applied to the first patch, which is plotted using
          Poly3DCollection to get a patch in the legend.
    """
    if not self.is_full_dimensional:
        if enable_warning:
            warnings.warn("Can not plot an empty polyhedron!", UserWarning)
        return plt.gca(), None, None
    elif not self.in_V_rep:
        V, is_bounded = enumerate_vertices(self.H, cvxpy_args=self.cvxpy_args_lp)
        if not is_bounded:
            # Can't plot an unbounded polyhedron
            if enable_warning:
                warnings.warn("Can not plot an unbounded polyhedron!", UserWarning)
            return plt.gca(), None, None
        self._V, self._in_V_rep = V, True

    # Create an axes if not yet defined
    if not ax:
        plt.figure()
        ax = cast(Axes3D, plt.axes(projection="3d"))

    patch_args, vertex_args = sanitize_patch_args_and_vertex_args(patch_args, vertex_args)

    V = self.V
    unit_H = self.H / np.linalg.norm(self.H[:, :3], axis=1)[:, np.newaxis]
    h_first_patch = Line3DCollection([], **patch_args)  # pyright: ignore[reportArgumentType]
    is_first_patch = True
    h_vert = None
    for halfspace in unit_H:
        face_vertex_indices = np.abs(V @ halfspace[:3] + halfspace[3]) <= PYHVPOLY_ZERO * max(1, np.max(np.abs(V)))
        if np.count_nonzero(face_vertex_indices) < 3:
            continue
        poly_face_V = V[face_vertex_indices, :]
        relative_vectors = poly_face_V - np.mean(poly_face_V, axis=0)
        # Rotate the relative vectors so that they all lie in XY plane
        rot_axis_vector = np.cross(halfspace[:3], [0, 0, 1])
        rot_angle = np.arccos(np.clip(np.dot(halfspace[:3], [0, 0, 1]), -1, 1))
        if np.linalg.norm(rot_axis_vector) > 0:
            rot_axis_vector = rot_axis_vector / np.linalg.norm(rot_axis_vector)
        R_matrix = cast(np.ndarray, Rotation.from_rotvec(rot_angle * rot_axis_vector).as_matrix())
        rotated_relative_vectors = (R_matrix @ relative_vectors.T).T
        order = np.argsort(np.arctan2(rotated_relative_vectors[:, 1], rotated_relative_vectors[:, 0]))
        poly_face_V = np.vstack((poly_face_V[order, :], poly_face_V[order[0], :]))
        poly_face_vertices = [[tuple(v) for v in poly_face_V]]
        if "label" in patch_args:
            if patch_args["facecolor"] is None:
                # facecolor=None doesn't work for an unfilled Poly3DCollection, so set alpha=0
                h = Poly3DCollection(poly_face_vertices, **dict(patch_args, alpha=0))  # pyright: ignore
            else:
                h = Poly3DCollection(poly_face_vertices, **patch_args)  # pyright: ignore[reportArgumentType]
            patch_args.pop("label")
        elif patch_args["facecolor"] is not None:
            h = Poly3DCollection(poly_face_vertices, **patch_args)  # pyright: ignore[reportArgumentType]
        else:
            h = Line3DCollection(poly_face_vertices, **patch_args)  # pyright: ignore[reportArgumentType]
        if is_first_patch:
            h_first_patch = h
            is_first_patch = False
        ax.add_collection3d(h)
        h_vert = ax.scatter(poly_face_V[:, 0], poly_face_V[:, 1], poly_face_V[:, 2], **vertex_args)
    if h_vert is None:
        warnings.warn("No plot generated since all faces had at most 2 vertices!", UserWarning)
    return ax, h_first_patch, h_vert


def plot_corridor(
    polyhedra: Sequence[Any],
    path: Optional[Sequence[Sequence[float]] | np.ndarray | None] = None,
    ax: Optional[Axes3D | None] = None,
    patch_args: Optional[dict[str, Any]] = None,
    vertex_args: Optional[dict[str, Any]] = None,
    path_args: Optional[dict[str, Any]] = None,
    enable_warning: bool = True,
) -> tuple[Any, list[Any], Any]:
    """Plot a corridor, i.e., a sequence of 3D polyhedra, and optionally a path through it.

    Args:
        polyhedra (Sequence[HPolyhedron | array_like]): Polyhedra or halfspace systems of shape (m, 4)
        path (array_like, optional): Path points arranged row-wise (N times 3). Defaults to None.
        ax (Axes3D | None, optional): Axes to plot. Defaults to None, in which case a new axes is created.
        patch_args (dict, optional): Arguments passed to :meth:`plot` for every polyhedron. Defaults to None.
        vertex_args (dict, optional): Arguments passed to :meth:`plot` for every polyhedron. Defaults to None.
        path_args (dict, optional): Arguments to pass to Axes3D.plot for the path. Defaults to None, in which case
            DEFAULT_PATH_ARGS is used.
        enable_warning (bool, optional): Enables the UserWarning for empty polyhedra. Defaults to True.

    Returns:
        (axes, list, handle): Tuple with axes, list of first-patch handles (one per polyhedron), handle for the path

    Notes:
        The axes limits are set to a cube around all the vertices (and the path), so that the corridor is not
        distorted.
    """
    from pyhvpoly.HPolyhedron import HPolyhedron

    if not ax:
        plt.figure()
        ax = cast(Axes3D, plt.axes(projection="3d"))

    h_patches = []
    all_points = []
    for polyhedron in polyhedra:
        if not is_hpolyhedron(polyhedron):
            polyhedron = HPolyhedron(H=polyhedron)
        patch_args_copy = None if patch_args is None else dict(patch_args)
        vertex_args_copy = None if vertex_args is None else dict(vertex_args)
        _, h_patch, _ = polyhedron.plot(
            ax=ax, patch_args=patch_args_copy, vertex_args=vertex_args_copy, enable_warning=enable_warning
        )
        h_patches.append(h_patch)
        if h_patch is not None:
            all_points.append(polyhedron.V)

    h_path = None
    if path is not None:
        path = sanitize_points(path)
        h_path = ax.plot(path[:, 0], path[:, 1], path[:, 2], **dict(DEFAULT_PATH_ARGS, **(path_args or {})))
        all_points.append(path)

    if all_points:
        stacked_points = np.vstack(all_points)
        mid_point = (np.max(stacked_points, axis=0) + np.min(stacked_points, axis=0)) / 2
        max_range = np.max(np.max(stacked_points, axis=0) - np.min(stacked_points, axis=0)) / 2
        ax.set_xlim(mid_point[0] - max_range, mid_point[0] + max_range)
        ax.set_ylim(mid_point[1] - max_range, mid_point[1] + max_range)
        ax.set_zlim(mid_point[2] - max_range, mid_point[2] + max_range)
    return ax, h_patches, h_path


def sanitize_patch_args_and_vertex_args(
    patch_args: Optional[dict[str, Any]], vertex_args: Optional[dict[str, Any]]
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Sanitize patch_args and vertex_args

    Args:
        patch_args (dict): Arguments to pass for plotting faces and edges.
        vertex_args (dict): Arguments to pass for plotting vertices.

    Raises:
        ValueError: When fill and facecolor are inconsistent
    """
    # fill is not supported in 3D plotting | "facecolor"=None is equivalent to fill=False
    if patch_args is None:
        patch_args = {"facecolor": None}
    else:
        patch_args = dict(patch_args)
    if "fill" in patch_args:
        if not patch_args["fill"]:
            if "facecolor" in patch_args and patch_args["facecolor"] is not None:
                raise ValueError("Can not have facecolor is not None and fill=False together!")
            else:
                patch_args["facecolor"] = None
        else:
            if "facecolor" in patch_args and patch_args["facecolor"] is None:
                raise ValueError("Can not have facecolor is None and fill=True together!")
        patch_args.pop("fill")
    patch_args = dict(DEFAULT_PATCH_ARGS_3D, **patch_args)  # Set other keys with default values
    if vertex_args:
        vertex_args = dict(vertex_args)
        if "visible" not in vertex_args:
            vertex_args["visible"] = True
        vertex_args = dict(DEFAULT_VERTEX_ARGS, **vertex_args)  # Override default values
    else:
        vertex_args = DEFAULT_VERTEX_ARGS
    return patch_args, vertex_args
