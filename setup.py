#!/usr/bin/env python
import os.path
from setuptools import find_namespace_packages, setup


version = "0.1.0"
with open("./python/lsst/daf/groupmap/version.py", "w") as f:
    print(f"""
__all__ = ("__version__", )
__version__ = '{version}'""", file=f)

# read the contents of our README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.md"), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name="lsst-daf-groupmap",
    version=f"{version}",
    description="Grouped collections: mappings from a group identifier to a nested mapping, set or list.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="BSD 3-Clause License",
    python_requires=">=3.11",
    package_dir={"": "python"},
    packages=find_namespace_packages(where="python", include=["lsst.daf.groupmap*"]),
    install_requires=[
        "lsst-utils",
        "pydantic >=2,<3.0",
    ],
    extras_require={"test": ["pytest >=3.2"]},
    zip_safe=False,
)
