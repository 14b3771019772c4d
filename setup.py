#!/usr/bin/env python3
"""Setup script for fuzzy_row_grouper package.
"""

from setuptools import find_packages, setup

setup(
    name="fuzzy_row_grouper",
    version="0.3.0",
    description="Group CSV rows by grapheme-aware edit-distance similarity",
    author="Fuzzy Row Grouper Team",
    packages=find_packages(include=["src", "src.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pandas>=1.5.0",
        "rapidfuzz>=3.0.0",
        "pyyaml>=6.0",
        "regex>=2023.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "pandas-stubs>=2.0.0",
            "types-PyYAML>=6.0.0",
            "types-regex",
        ],
    },
    entry_points={
        "console_scripts": [
            "fuzzy-row-grouper=src.cli:main",
        ],
    },
)
