# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  __init__ script for pyhvpoly package

from .common import is_hpolyhedron
from .HPolyhedron import HPolyhedron
from .HPolyhedron.operations_binary import contains_points, intersection, overlaps
from .HPolyhedron.operations_unary import find_interior
from .HPolyhedron.plotting_scripts import plot_corridor
from .HPolyhedron.vertex_halfspace_enumeration import (
    enumerate_vertices,
    filter_vertices,
    halfspaces_from_vertices,
    minimize_h_poly,
)
