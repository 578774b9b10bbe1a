"""
Bundler for Lua require() graphs.

Resolves require("name") calls starting from one entry file and writes a single
self-contained Lua script: a small runtime, one wrapped definition per module,
then the entry file's own code.
"""
import os

from .codegen import generate_bundle
from .config import BundleOptions
from .emitter import plan_emission
from .graph import GraphBuilder
from .models import BundleResult
from .resolver import PathResolver


def bundle(entrypoint, options=None):
    """
    Bundle a Lua entry file and everything it requires.

    Args:
        entrypoint: Path to the entry .lua file
        options: BundleOptions (defaults: entry directory as the only root)

    Returns:
        BundleResult with the bundled source, warnings and module paths

    Raises:
        SourceReadError: If a module cannot be read
        UnresolvedModuleError: If a literal require cannot be resolved
        ResourceExceededError: If options.max_modules is exceeded
        InvariantViolation: If the emission order is inconsistent (a bug)
    """
    if options is None:
        options = BundleOptions()
    entrypoint = os.path.abspath(entrypoint)

    resolver = PathResolver(options.roots_for(entrypoint), options.module_extension)
    builder = GraphBuilder(resolver, max_modules=options.max_modules, externals=options.externals)

    graph = builder.build(entrypoint)
    plan = plan_emission(graph)
    source = generate_bundle(plan)

    return BundleResult(source=source, warnings=graph.warnings, modules=plan.paths())
