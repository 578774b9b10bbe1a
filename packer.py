import os
import sys

from luabundle import bundle, load_options

# Global verbose flag
_VERBOSE = os.environ.get("LUAPACK_DEBUG", "").lower() == "true"


def set_verbose(value):
    """Set the global verbose flag."""
    global _VERBOSE
    _VERBOSE = value


def debug_log(message):
    """Log a debug message to stderr if verbose mode is enabled."""
    if _VERBOSE:
        print(f"\033[94mDEBUG:\033[0m {message}", file=sys.stderr)


def default_output_path(entrypoint):
    """main.lua -> main.bundled.lua, next to the entry file."""
    directory = os.path.dirname(entrypoint)
    stem, _ = os.path.splitext(os.path.basename(entrypoint))
    return os.path.join(directory, stem + ".bundled.lua")


def bundle_source(entrypoint, overrides=None):
    """
    Bundle an entry file using its luapack.json plus overrides.

    Returns:
        BundleResult from luabundle.bundle()
    """
    entrypoint = os.path.abspath(entrypoint)
    options = load_options(entrypoint, overrides)
    debug_log(f"Bundling {entrypoint}")
    debug_log(f"Search roots: {options.roots_for(entrypoint)}")
    if options.externals:
        debug_log(f"Externals: {options.externals}")

    result = bundle(entrypoint, options)

    for path in result.modules:
        debug_log(f"  module {path}")
    debug_log(f"Bundled {len(result.modules)} file(s), {len(result.source)} bytes")
    return result


def bundle_to_file(entrypoint, output_path=None, overrides=None):
    """
    Bundle an entry file and write the result to disk.

    Nothing is written when bundling fails.

    Returns:
        (output_path, BundleResult)
    """
    if not os.path.isfile(entrypoint):
        raise FileNotFoundError(f"Entrypoint file does not exist: {entrypoint}")

    entrypoint = os.path.abspath(entrypoint)
    if output_path is None:
        output_path = default_output_path(entrypoint)
        debug_log(f"Using default output path: {output_path}")

    result = bundle_source(entrypoint, overrides)

    output_dir = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(output_dir, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(result.source)

    debug_log(f"Bundle written to: {output_path}")
    return output_path, result
