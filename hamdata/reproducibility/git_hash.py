"""Git hash capture with dirty-tree detection.

The short SHA is stored in every dataset manifest so a dataset can be traced
back to the generator code that produced it.
"""

import subprocess

UNKNOWN = "unknown"


def _git_succeeds(*args: str) -> bool:
    """Run a git command, returning False on a non-zero exit."""
    try:
        subprocess.check_output(["git", *args], stderr=subprocess.DEVNULL)
    except subprocess.CalledProcessError:
        return False
    return True


def get_git_hash() -> str:
    """Short git SHA of HEAD, suffixed with '-dirty' for uncommitted changes.

    Returns:
        "a3f9c1d" for a clean tree, "a3f9c1d-dirty" when staged or unstaged
        changes exist, "unknown" outside a repository or without git.
    """
    try:
        sha = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            stderr=subprocess.DEVNULL,
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return UNKNOWN

    clean = _git_succeeds("diff", "--quiet") and _git_succeeds(
        "diff", "--quiet", "--cached"
    )
    return sha if clean else f"{sha}-dirty"
