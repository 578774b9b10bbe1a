"""
Topological emitter: turns the builder's post-order into a checked EmissionPlan.
"""
from typing import List, NamedTuple

from .errors import InvariantViolation
from .graph import Color, ModuleNode


class EmissionPlan(NamedTuple):
    nodes: List[ModuleNode]
    entry: ModuleNode

    def modules(self):
        """Plan entries other than the entry file, in definition order."""
        return [node for node in self.nodes if node is not self.entry]

    def paths(self):
        return [node.path for node in self.nodes]


def plan_emission(graph):
    """
    Validate the graph's post-order and wrap it as an EmissionPlan.

    The post-order is already a valid linearization; this re-checks it so an
    engine defect fails loudly instead of producing a bundle that requires a
    module before defining it.
    """
    order = list(graph.order)
    position = {}
    for index, node in enumerate(order):
        if node.path in position:
            raise InvariantViolation(f"{node.path} appears twice in the emission order")
        if node.color is not Color.BLACK:
            raise InvariantViolation(f"{node.path} was emitted before it finished")
        position[node.path] = index

    if len(order) != len(graph):
        missing = [path for path in graph.nodes if path not in position]
        raise InvariantViolation(f"modules never emitted: {', '.join(missing)}")

    if not order or order[-1] is not graph.entry:
        raise InvariantViolation("the entry file must be emitted last")

    for index, node in enumerate(order):
        for dep in node.ordered_dependencies():
            if position[dep.path] >= index:
                raise InvariantViolation(
                    f"{node.path} is emitted before its dependency {dep.path}")

    return EmissionPlan(order, graph.entry)
