import argparse
import os
import sys

from luabundle import BundleError
from luabundle.discovery import find_lua_files
from packer import bundle_to_file, set_verbose


def log(message):
    """Log informational messages to stderr."""
    print(f"\033[92m\033[1mINFO:\033[0m {message}", file=sys.stderr)


def warn(message):
    print(f"\033[93m\033[1mWARN:\033[0m {message}", file=sys.stderr)


def fail(message):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def bundle_overrides(args):
    """CLI flags that override luapack.json values."""
    return {
        "search_roots": [os.path.abspath(root) for root in (args.search_root or [])],
        "module_extension": args.extension,
        "max_modules": args.max_modules,
        "externals": args.external or [],
    }


def run_bundle(entrypoint, output_path, args):
    """Bundle one entry file; exits non-zero on any fatal error."""
    try:
        target, result = bundle_to_file(entrypoint, output_path, bundle_overrides(args))
    except FileNotFoundError as e:
        fail(str(e))
    except BundleError as e:
        print(f"Bundle failed: {e.summary()}", file=sys.stderr)
        if args.verbose:
            print(str(e), file=sys.stderr)
        sys.exit(1)

    for warning in result.warnings:
        warn(str(warning))
    log(f"Successfully bundled {entrypoint} to {target} ({len(result.modules)} file(s))")
    return target


def cmd_bundle(args):
    run_bundle(args.entrypoint, args.output_path, args)


def cmd_discover(args):
    root = args.directory
    if not os.path.isdir(root):
        fail(f"'{root}' is not a directory")
    files = find_lua_files(root, max_depth=args.max_depth)
    if not files:
        log(f"No .lua files found in {os.path.abspath(root)}")
        return
    for path in files:
        print(path)


def choose_entrypoint(root, files, stream=None):
    """
    Ask the user to pick an entry file.

    Accepts a number from the listed files, or a path typed by hand
    (relative to root or absolute). Returns None if input ends.
    """
    stream = stream or sys.stdin
    for index, path in enumerate(files, 1):
        print(f"  {index:>3}. {path}", file=sys.stderr)
    while True:
        print("Select an entry file (number or path): ", end="", file=sys.stderr, flush=True)
        line = stream.readline()
        if not line:
            return None
        choice = line.strip()
        if not choice:
            continue
        if choice.isdigit() and 1 <= int(choice) <= len(files):
            return os.path.join(root, files[int(choice) - 1])
        candidate = choice if os.path.isabs(choice) else os.path.join(root, choice)
        if os.path.isfile(candidate):
            return candidate
        warn(f"'{choice}' is not a listed number or an existing file")


def cmd_pick(args):
    root = os.path.abspath(args.directory)
    if not os.path.isdir(root):
        fail(f"'{root}' is not a directory")
    files = find_lua_files(root, max_depth=args.max_depth)
    if files:
        log(f"Found {len(files)} Lua file(s) in {root}")
    else:
        log(f"No .lua files found in {root}; type a path instead")

    entrypoint = choose_entrypoint(root, files)
    if entrypoint is None:
        fail("No entry file selected")
    run_bundle(os.path.abspath(entrypoint), args.output_path, args)


def add_bundle_flags(parser):
    parser.add_argument("--output-path", "--outputPath", dest="output_path",
                        help="Where to write the bundle (default: <entrypoint>.bundled.lua)")
    parser.add_argument("--search-root", action="append", metavar="DIR",
                        help="Module search root, in priority order (repeatable)")
    parser.add_argument("--extension", help="Module file extension (default: .lua)")
    parser.add_argument("--max-modules", type=int, help="Fail if more modules than this are reached")
    parser.add_argument("--external", action="append", metavar="NAME",
                        help="Module provided by the runtime; left to the native require (repeatable)")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging for detailed output")


def build_parser():
    parser = argparse.ArgumentParser(description="luapack: bundle Lua files into a single script")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output (sent to stderr)")
    subparsers = parser.add_subparsers(dest="command")

    bundle = subparsers.add_parser("bundle", help="Bundle a Lua entry file and its requires")
    bundle.add_argument("--entrypoint", required=True, help="Path to the main Lua file")
    add_bundle_flags(bundle)

    discover = subparsers.add_parser("discover", help="List candidate Lua entry files")
    discover.add_argument("directory", nargs="?", default=".", help="Directory to search (default: .)")
    discover.add_argument("--max-depth", type=int, default=5, help="Directory depth limit (default: 5)")

    pick = subparsers.add_parser("pick", help="Choose an entry file interactively, then bundle it")
    pick.add_argument("directory", nargs="?", default=".", help="Directory to search (default: .)")
    pick.add_argument("--max-depth", type=int, default=5, help="Directory depth limit (default: 5)")
    add_bundle_flags(pick)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.verbose = args.verbose or getattr(args, "debug", False)
    if args.verbose:
        set_verbose(True)

    if args.command == "bundle": cmd_bundle(args)
    elif args.command == "discover": cmd_discover(args)
    elif args.command == "pick": cmd_pick(args)
    else: parser.print_help()


if __name__ == "__main__":
    main()
