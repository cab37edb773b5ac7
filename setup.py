#!/usr/bin/env python3
"""
Setup script for projection-deploy.
"""

import codecs
import os
import re
from setuptools import setup, find_packages


def read(rel_path):
    """Read file content."""
    here = os.path.abspath(os.path.dirname(__file__))
    with codecs.open(os.path.join(here, rel_path), 'r', 'utf-8') as fp:
        return fp.read()


def find_version(rel_path):
    """Extract version from the version module."""
    version_content = read(rel_path)
    version_match = re.search(
        r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
        version_content,
        re.MULTILINE
    )
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


if __name__ == "__main__":
    setup(
        name="projection-deploy",
        version=find_version("projection/__version__.py"),
        description="Deploy projection portfolio sites to GitHub Pages",
        license="MIT",
        packages=find_packages(exclude=["tests*", "docs*", "examples*", "scripts*"]),
        python_requires=">=3.9",
        install_requires=[
            "click>=8.0",
            "rich>=12.0",
            "PyYAML>=6.0",
            "jsonschema>=4.0",
            "fastapi>=0.100",
            "pydantic>=2.0",
            "uvicorn>=0.20",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
                "httpx>=0.24",
            ],
        },
        entry_points={
            "console_scripts": [
                "projection=projection.cli.main:main",
            ],
        },
    )
