"""Path arithmetic for transfer sets.

Relative paths are derived by cutting a fixed number of characters off the
front of each absolute path rather than by trimming a string prefix. The cut
only depends on the length of the root's parent, so it keeps working when the
root and the walked paths disagree on separators ("C:/home/dir" and
"C:\\home\\dir\\file" both lose "C:/home/").

Every "is this inside the root" question goes through :func:`is_within`.
"""

import logging
import os

from dirshare.transfer.errors import DangerousFilenameError

logger = logging.getLogger(__name__)

def prefix_length(root: str, pathmod=os.path) -> int:
    # Length of the parent including its trailing separator
    _, base = pathmod.split(root)
    return len(root) - len(base)

def strip_prefix(path: str, prefix_len: int) -> str:
    return path[prefix_len:]

def common_base(paths: list[str], pathmod=os.path) -> str:
    # Every selected item is expected to share the parent of the first one
    return pathmod.dirname(pathmod.abspath(paths[0]))

def _normalize(path: str, pathmod) -> str:
    return pathmod.normcase(pathmod.abspath(path))

def is_within(root: str, path: str, pathmod=os.path) -> bool:
    """Return True if ``path`` is a strict descendant of ``root``.

    Both paths are made absolute and cleaned (``..`` and duplicate separators
    collapsed) before comparing. Symlinks are not resolved.
    """
    root = _normalize(root, pathmod)
    path = _normalize(path, pathmod)

    if path == root:
        return False

    try:
        return pathmod.commonpath([root, path]) == root
    except ValueError:
        # Different drives
        return False

def ensure_within(root: str, path: str, pathmod=os.path) -> str:
    if not is_within(root, path, pathmod):
        logger.warning(f"Rejected path \"{path}\" outside of \"{root}\"")
        raise DangerousFilenameError(path, root)

    return pathmod.abspath(path)
