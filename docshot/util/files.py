"""
Screenshot discovery.
"""

import os

PNG_EXTENSION = ".png"


def _raise(error: OSError) -> None:
    raise error


def find_png_files(directory: str) -> list[str]:
    """
    Recursively collect PNG files under a directory.

    Order follows filesystem enumeration (not sorted); subdirectories,
    including symlinked ones, are descended without a depth limit. The
    extension match is case-insensitive.

    Raises:
        OSError: a directory in the tree cannot be listed.
    """
    matches: list[str] = []
    # real paths of each directory's ancestors, to stop at symlink cycles
    ancestors_of: dict[str, frozenset[str]] = {directory: frozenset()}
    for root, dirs, files in os.walk(directory, followlinks=True, onerror=_raise):
        real_root = os.path.realpath(root)
        ancestors = ancestors_of.pop(root, frozenset())
        if real_root in ancestors:
            dirs[:] = []
            continue
        below = ancestors | {real_root}
        for name in dirs:
            ancestors_of[os.path.join(root, name)] = below
        for name in files:
            if os.path.splitext(name)[1].lower() == PNG_EXTENSION:
                matches.append(os.path.join(root, name))
    return matches
