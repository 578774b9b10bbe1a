"""
Dependency graph builder.

Walks require() edges depth-first from the entry file using explicit
WHITE/GRAY/BLACK colouring:

- WHITE: not reached yet
- GRAY: on the current traversal stack (an edge into it is a cycle)
- BLACK: finished and already appended to the emission order

The walk uses its own stack instead of Python recursion so long require
chains cannot hit the interpreter's recursion limit. Everything here is local
to one build() call.
"""
from enum import Enum

from .errors import ResourceExceededError
from .models import AliasConflictWarning
from .reader import read_source
from .resolver import canonical_path, normalize_target
from .scanner import scan_requires


class Color(Enum):
    WHITE = "white"
    GRAY = "gray"
    BLACK = "black"


class ModuleNode:
    """One Lua file in the bundle, identified by its canonical path."""

    def __init__(self, path):
        self.path = path
        self.aliases = []  # require strings that resolve here, first-seen order
        self.source = None
        self.children = []  # every resolved child, discovery order
        self.deferred = []  # children reached over a back edge
        self.color = Color.WHITE

    def add_alias(self, alias):
        if alias not in self.aliases:
            self.aliases.append(alias)

    def add_child(self, node):
        if node not in self.children:
            self.children.append(node)

    def defer(self, node):
        if node not in self.deferred:
            self.deferred.append(node)

    def ordered_dependencies(self):
        """Children that must be defined before this node."""
        return [child for child in self.children if child not in self.deferred]

    def __repr__(self):
        return f"ModuleNode({self.path!r}, color={self.color.value})"


class DependencyGraph:
    """All modules reachable from one entry file."""

    def __init__(self):
        self.nodes = {}  # canonical path -> ModuleNode, discovery order
        self.aliases = {}  # require string -> ModuleNode that owns it
        self.entry = None
        self.order = []  # post-order: dependencies first, entry last
        self.warnings = []

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, path):
        return path in self.nodes

    def __iter__(self):
        return iter(self.nodes.values())

    def get(self, path):
        return self.nodes.get(path)

    def deferred_edges(self):
        return [(node, child) for node in self.nodes.values() for child in node.deferred]


class GraphBuilder:
    """Builds a DependencyGraph with a PathResolver and the require scanner."""

    def __init__(self, resolver, max_modules=None, externals=()):
        self.resolver = resolver
        self.max_modules = max_modules
        self.externals = {normalize_target(name) for name in externals}

    def build(self, entry_path):
        """
        Discover every module reachable from entry_path.

        Raises:
            SourceReadError: If a module cannot be read
            UnresolvedModuleError: If a literal require matches no file
            ResourceExceededError: If more than max_modules files are reached
        """
        graph = DependencyGraph()
        graph.entry = self._node(graph, canonical_path(entry_path))
        self._walk(graph, graph.entry)
        return graph

    def _node(self, graph, path):
        node = graph.get(path)
        if node is None:
            if self.max_modules is not None and len(graph) >= self.max_modules:
                raise ResourceExceededError(self.max_modules, path)
            node = ModuleNode(path)
            graph.nodes[path] = node
        return node

    def _enter(self, graph, node):
        node.color = Color.GRAY
        node.source = read_source(node.path)
        result = scan_requires(node.source, node.path)
        graph.warnings.extend(result.warnings)
        return node, iter(result.refs)

    def _walk(self, graph, root):
        stack = [self._enter(graph, root)]
        while stack:
            node, refs = stack[-1]
            ref = next(refs, None)
            if ref is None:
                node.color = Color.BLACK
                graph.order.append(node)
                stack.pop()
                continue

            child = self._link(graph, node, ref)
            if child is None:
                continue
            if child.color is Color.WHITE:
                stack.append(self._enter(graph, child))
            elif child.color is Color.GRAY:
                node.defer(child)

    def _link(self, graph, parent, ref):
        """Resolve one ref, record its alias and the parent -> child edge."""
        if normalize_target(ref.target) in self.externals:
            return None

        child = self._node(graph, self.resolver.resolve(ref))
        owner = graph.aliases.get(ref.target)
        if owner is None:
            graph.aliases[ref.target] = child
            child.add_alias(ref.target)
        elif owner is not child:
            warning = AliasConflictWarning(alias=ref.target, kept=owner.path,
                                           ignored=child.path, requiring_file=ref.requiring_file)
            if warning not in graph.warnings:
                graph.warnings.append(warning)

        parent.add_child(child)
        return child
