# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

from setuptools import setup

with open("README.md", "r") as fh:
    long_description = fh.read()

# numpy>=1.14 for rcond=None correct defaults from https://stackoverflow.com/a/44678023
# scipy>=1.11.0 for scipy.spatial.QhullError
# pycddlib>=3.0.0 for the functional API (matrix_from_array, copy_inequalities, matrix_canonicalize)
# matplotlib>=3.8 for https://github.com/matplotlib/matplotlib/pull/25565
# cvxpy>=1.5.3 for CLARABEL as the default LP solver
INSTALL_REQUIRES = [
    "numpy>=1.14",
    "scipy>=1.11.0",
    "pycddlib>=3.0.0",
    "matplotlib>=3.8",
    "cvxpy>=1.5.3",
]
TESTS_REQUIRES = ["pytest", "coverage"]

setup(
    name="pyhvpoly",
    version="1.0.0",
    description="A Python package for halfspace-vertex conversion and overlap tests of 3D convex polyhedra.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="AGPL-3.0-or-later",
    packages=["pyhvpoly", "pyhvpoly.common", "pyhvpoly.HPolyhedron"],
    install_requires=INSTALL_REQUIRES,
    extras_require={
        "with_tests": TESTS_REQUIRES,
    },
    python_requires=">=3.9",  # for matplotlib>=3.8
    zip_safe=False,
)
