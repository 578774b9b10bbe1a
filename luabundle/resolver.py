"""
Path resolver: turns a require target into a canonical file path.

Lua's own searcher replaces every '.' in a module name with the directory
separator and tries each entry of package.path in order, taking the first
file that exists. The resolver follows the same first-match-wins order over
the configured search roots so the bundle loads the same files an unbundled
run would.
"""
import os

from .errors import UnresolvedModuleError

DEFAULT_EXTENSION = '.lua'
PACKAGE_INIT = 'init'


def normalize_target(target):
    """'a.b.c' and 'a/b/c' both become 'a/b/c'."""
    return target.replace('.', '/')


def canonical_path(path):
    return os.path.realpath(os.path.abspath(path))


class PathResolver:
    """Resolves ModuleRefs against an ordered list of search roots."""

    def __init__(self, search_roots, module_extension=DEFAULT_EXTENSION):
        if not search_roots:
            raise ValueError("PathResolver needs at least one search root")
        self.search_roots = [canonical_path(root) for root in search_roots]
        if not module_extension.startswith('.'):
            module_extension = '.' + module_extension
        self.module_extension = module_extension

    def roots_for(self, requiring_file):
        """Project root, then the requiring file's directory, then the other roots."""
        ordered = [self.search_roots[0], os.path.dirname(requiring_file)]
        ordered.extend(self.search_roots[1:])
        roots = []
        for root in ordered:
            if root not in roots:
                roots.append(root)
        return roots

    def candidates(self, target, root):
        relative = normalize_target(target)
        yield os.path.join(root, relative + self.module_extension)
        yield os.path.join(root, relative, PACKAGE_INIT + self.module_extension)

    def resolve(self, ref):
        """
        Find the file a ModuleRef points to.

        Returns:
            The canonical path of the first existing candidate

        Raises:
            UnresolvedModuleError: If no search root holds the module
        """
        roots = self.roots_for(ref.requiring_file)
        for root in roots:
            for candidate in self.candidates(ref.target, root):
                if os.path.isfile(candidate):
                    return canonical_path(candidate)
        raise UnresolvedModuleError(ref.target, ref.requiring_file, roots)
