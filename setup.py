#!/usr/bin/env python3
"""
Setup script for Style Kits.
"""

from pathlib import Path

from setuptools import find_packages, setup


# Read the README file (optional for Docker builds)
def read_readme():
    try:
        with open("README.md", "r", encoding="utf-8") as fh:
            return fh.read()
    except FileNotFoundError:
        return "Style Kits - template library browser and catalog service"


def read_requirements(filename):
    try:
        with open(filename, "r", encoding="utf-8") as fh:
            return [
                line.strip()
                for line in fh
                if line.strip()
                and not line.startswith("#")
                and not line.startswith("-r")
            ]
    except FileNotFoundError:
        return []


# Read version from _version.py
def read_version():
    """
    Read the fallback version from _version.py without importing the package.
    """
    version_file = Path(__file__).parent / "src" / "style_kits" / "_version.py"
    for line in version_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("DEFAULT_VERSION"):
            return line.split("=", 1)[1].strip().strip("\"'")
    return "0.1.0"


setup(
    name="style-kits",
    version=read_version(),
    description="Template library browser and catalog service for Style Kits",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"style_kits": ["config/*.yml"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "dev": read_requirements("requirements-dev.txt"),
    },
    entry_points={
        "console_scripts": [
            "style-kits=style_kits.main:cli",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
