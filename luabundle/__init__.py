# luapack - Lua Bundler Core
"""
Core modules for the Lua bundler:
- errors: Fatal error types
- models: ModuleRef, warnings and BundleResult
- grammar: Lark token grammar for Lua
- scanner: require() call site extraction
- resolver: Module name to file path resolution
- graph: Dependency graph builder with cycle detection
- emitter: Emission order validation
- codegen: Bundle text generation (runtime preamble in runtime/)
- config: BundleOptions and luapack.json loading
- discovery: Entry-file discovery
"""

from .errors import (
    BundleError,
    ConfigError,
    InvariantViolation,
    ResourceExceededError,
    SourceReadError,
    UnresolvedModuleError,
)
from .models import AliasConflictWarning, BundleResult, DynamicRequireWarning, ModuleRef
from .config import BundleOptions, load_options
from .bundler import bundle

__all__ = [
    'BundleError',
    'ConfigError',
    'InvariantViolation',
    'ResourceExceededError',
    'SourceReadError',
    'UnresolvedModuleError',
    'AliasConflictWarning',
    'BundleResult',
    'DynamicRequireWarning',
    'ModuleRef',
    'BundleOptions',
    'load_options',
    'bundle',
]
