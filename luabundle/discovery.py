"""
Entry-file discovery for the interactive picker.
"""
import os

SKIP_DIRS = {
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    "target",
    "vendor",
    ".vscode",
    ".idea",
    "__pycache__",
}
BUNDLE_SUFFIX = ".bundled.lua"


def find_lua_files(root_dir, max_depth=5, skip_dirs=SKIP_DIRS):
    """
    Recursively find .lua files under root_dir.

    Args:
        root_dir: Directory to search
        max_depth: How many directory levels below root_dir to descend
        skip_dirs: Directory names that are never entered

    Returns:
        Sorted paths relative to root_dir, using '/' separators. Previously
        bundled outputs (*.bundled.lua) are left out.
    """
    root_dir = os.path.abspath(root_dir)
    found = []

    for current, dirs, files in os.walk(root_dir):
        depth = 0 if current == root_dir else os.path.relpath(current, root_dir).count(os.sep) + 1
        if depth >= max_depth:
            dirs[:] = []
        else:
            dirs[:] = [d for d in dirs if d not in skip_dirs]

        for name in files:
            lowered = name.lower()
            if lowered.endswith(".lua") and not lowered.endswith(BUNDLE_SUFFIX):
                relative = os.path.relpath(os.path.join(current, name), root_dir)
                found.append(relative.replace(os.sep, "/"))

    return sorted(found)
