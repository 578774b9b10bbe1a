"""
Error types for the Lua bundler.

Fatal errors derive from BundleError and abort a bundle() call; no partial
bundle is ever returned. Non-fatal findings are reported as warnings (see
luabundle.models).
"""


class BundleError(Exception):
    """Base exception for bundling failures, with optional context and a hint."""
    def __init__(self, message, context=None, suggestion=None):
        self.message = message
        self.context = context  # Offending file or target
        self.suggestion = suggestion  # How to fix it
        super().__init__(self._format_error())

    def _format_error(self):
        """Format the error message with context and suggestion."""
        lines = [self.message]
        if self.context:
            lines.append(f"\n   > {self.context}")
        if self.suggestion:
            lines.append(f"\n   Hint: {self.suggestion}")
        return "".join(lines)

    def summary(self):
        """One-line description for CLI output."""
        return f"{type(self).__name__}: {self.message}"


class SourceReadError(BundleError):
    """A module file exists in the graph but could not be read."""
    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(
            f"Cannot read {path}: {cause}",
            context=path,
            suggestion="Check that the file exists and is readable UTF-8 text",
        )


class UnresolvedModuleError(BundleError):
    """A literal require target matched no file under any search root."""
    def __init__(self, target, requiring_file, roots_tried):
        self.target = target
        self.requiring_file = requiring_file
        self.roots_tried = list(roots_tried)
        roots = ", ".join(self.roots_tried) or "<none>"
        super().__init__(
            f"Module '{target}' required by {requiring_file} was not found",
            context=f"searched: {roots}",
            suggestion="Add the directory holding it with --search-root, "
                       "or list it with --external if the runtime provides it",
        )


class ResourceExceededError(BundleError):
    """The dependency graph grew past the configured module cap."""
    def __init__(self, limit, path):
        self.limit = limit
        self.path = path
        super().__init__(
            f"Module limit of {limit} exceeded while adding {path}",
            suggestion="Raise max_modules or split the program",
        )


class InvariantViolation(BundleError):
    """The emission plan broke its own ordering guarantees. This is a bundler bug."""
    def __init__(self, message):
        super().__init__(message, suggestion="Please report this as a bug")


class ConfigError(BundleError):
    """A luapack.json file or option value is invalid."""
    def __init__(self, message, path=None):
        self.path = path
        super().__init__(message, context=path)
