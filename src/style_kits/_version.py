"""
Version information for the Style Kits library.

The installed distribution metadata wins; a source checkout falls back to the
latest ``v*.*.*`` Git tag and finally to a default version.
"""

import subprocess
from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "style-kits"
DEFAULT_VERSION = "1.6.0"


def get_version_from_metadata():
    """Return the version of the installed distribution, or None."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return None


def get_version_from_git():
    """
    Read the newest release tag from the enclosing Git checkout.

    Returns:
        str: Version string without the ``v`` prefix, or None when the
        package does not live in a repository or git is unavailable.
    """
    here = Path(__file__).resolve().parent
    repo_root = next(
        (parent for parent in [here, *here.parents] if (parent / ".git").exists()),
        None,
    )
    if repo_root is None:
        return None

    try:
        result = subprocess.run(
            ["git", "tag", "-l", "v*.*.*", "--sort=-version:refname"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, subprocess.SubprocessError):
        return None

    tags = result.stdout.split()
    if result.returncode != 0 or not tags:
        return None
    return tags[0].lstrip("v")


def get_version():
    """Resolve the package version."""
    return get_version_from_metadata() or get_version_from_git() or DEFAULT_VERSION


__version__ = get_version()
