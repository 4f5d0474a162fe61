# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: A diagnostic python script to check if pyhvpoly is installed correctly.

from argparse import ArgumentParser

import matplotlib.pyplot as plt
import numpy as np
from scipy.spatial.transform import Rotation

from pyhvpoly import HPolyhedron, enumerate_vertices, overlaps, plot_corridor


def run_demo(use_plot_show, save_plot):
    # Corridor of three polyhedra: two boxes and a rotated box
    first_box = HPolyhedron(lb=[0, 0, 0], ub=[2, 1, 1])
    second_box = HPolyhedron(lb=[1.5, -0.5, 0], ub=[2.5, 3, 1.5])
    R = Rotation.from_rotvec(np.pi / 6 * np.array([0, 0, 1])).as_matrix()
    rotated_box_center = np.array([2.5, 3.2, 0.75])
    # x in rotated box <=> R^T (x - center) in box of half-sides h
    h = np.array([1.2, 0.5, 0.75])
    A = np.vstack((R.T, -R.T))
    b = np.hstack((h, h)) + A @ rotated_box_center
    third_box = HPolyhedron(A=A, b=b)
    corridor = [first_box, second_box, third_box]

    for index, (P, Q) in enumerate(zip(corridor[:-1], corridor[1:])):
        print(f"Polyhedra {index:d} and {index + 1:d} overlap: {overlaps(P.H, Q.H)}")
    print(f"Polyhedra 0 and 2 overlap: {overlaps(first_box.H, third_box.H)}")

    V, success = enumerate_vertices(third_box.H)
    print(f"Vertex enumeration of the rotated box succeeded: {success} with {V.shape[0]:d} vertices")

    path = np.array([[0.5, 0.5, 0.5], [1.8, 0.5, 0.5], [2.0, 2.6, 0.7], [3.0, 3.5, 0.8]])
    ax, _, _ = plot_corridor(corridor, path=path, patch_args={"facecolor": "lightblue", "alpha": 0.3})
    ax.set_title("Safe flight corridor")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    if save_plot:
        plt.savefig("pyhvpoly_diag.png", dpi=300)
        print("Plot saved!")
    if use_plot_show:
        plt.show()
    else:
        plt.close()


if __name__ == "__main__":
    parser = ArgumentParser(
        prog="pyhvpoly_diag",
        description="A python script that performs simple polyhedron manipulations to make sure "
        "pyhvpoly is installed correctly",
    )
    parser.add_argument("--do_not_use_plot_show", action="store_false")
    parser.add_argument("--save_plot", action="store_true")
    args = parser.parse_args()
    run_demo(args.do_not_use_plot_show, args.save_plot)
