"""Adjacency matrix model for dependency wheels."""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """A single node of the wheel."""

    index: int
    name: str
    package: Any = None
    has_package: bool = False  # True when the input carried a nodes array

    @property
    def value(self) -> Any:
        """Object reported to selection callbacks: the package if given, else the name."""
        return self.package if self.has_package else self.name


def _as_weight(value: Any, row: int, col: int) -> float:
    """Convert a matrix entry to float, rejecting anything that is not a finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            f"matrix[{row}][{col}] must be a number, got {type(value).__name__}"
        )
    weight = float(value)
    if not math.isfinite(weight):
        raise ValidationError(f"matrix[{row}][{col}] must be finite, got {value!r}")
    if weight < 0:
        raise ValidationError(f"matrix[{row}][{col}] must be non-negative, got {value!r}")
    return weight


def _validate_weights(weights: Any) -> tuple[tuple[float, ...], ...]:
    """Check the matrix is square with non-negative numeric entries.

    Args:
        weights: Sequence of rows.

    Returns:
        The weights as an immutable tuple of float tuples.

    Raises:
        ValidationError: If the matrix is empty, ragged, non-square or has bad entries.
    """
    if isinstance(weights, (str, bytes)) or not isinstance(weights, Sequence):
        raise ValidationError("matrix must be a sequence of rows")

    n = len(weights)
    if n == 0:
        raise ValidationError("matrix must have at least one row")

    rows: list[tuple[float, ...]] = []
    for i, row in enumerate(weights):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise ValidationError(f"matrix row {i} must be a sequence")
        if len(row) != n:
            raise ValidationError(
                f"matrix row {i} has {len(row)} columns, expected {n} (matrix must be square)"
            )
        rows.append(tuple(_as_weight(v, i, j) for j, v in enumerate(row)))

    return tuple(rows)


@dataclass(frozen=True)
class DependencyMatrix:
    """Square weighted adjacency matrix over named nodes.

    Row i / column j holds the weight of the dependency from node i to node j.
    Node 0 is the root of the wheel. The diagonal is allowed to be non-zero
    but never contributes to layout or selection.
    """

    names: tuple[str, ...]
    weights: tuple[tuple[float, ...], ...]
    packages: tuple[Any, ...] | None = None
    _nodes: tuple[Node, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        weights = _validate_weights(self.weights)
        n = len(weights)

        names = tuple(self.names)
        if len(names) != n:
            raise ValidationError(
                f"got {len(names)} node names for a {n}x{n} matrix"
            )

        packages = None
        if self.packages is not None:
            packages = tuple(self.packages)
            if len(packages) != n:
                raise ValidationError(
                    f"got {len(packages)} nodes for a {n}x{n} matrix"
                )

        object.__setattr__(self, "weights", weights)
        object.__setattr__(self, "names", names)
        object.__setattr__(self, "packages", packages)
        object.__setattr__(
            self,
            "_nodes",
            tuple(
                Node(
                    index=i,
                    name=names[i],
                    package=packages[i] if packages is not None else None,
                    has_package=packages is not None,
                )
                for i in range(n)
            ),
        )

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "DependencyMatrix":
        """Build a matrix from a render payload.

        Accepts ``{"nodeNames", "matrix", "nodes"}`` as well as the
        ``{"packageNames", "matrix", "packages"}`` spelling. When only nodes
        are given, names are read from each node's ``name`` key or attribute.

        Args:
            data: Render payload.

        Returns:
            Validated DependencyMatrix.

        Raises:
            ValidationError: If the payload is incomplete or malformed.
        """
        if "matrix" not in data:
            raise ValidationError("data must contain a 'matrix'")

        packages = data.get("nodes", data.get("packages"))
        names = data.get("nodeNames", data.get("packageNames"))

        if names is None:
            if packages is None:
                raise ValidationError("data must contain 'nodeNames' or 'nodes'")
            names = [_node_name(pkg, i) for i, pkg in enumerate(packages)]

        return cls(names=names, weights=data["matrix"], packages=packages)

    @classmethod
    def from_graph(
        cls,
        graph: nx.DiGraph,
        root: Any,
        weight: str = "weight",
    ) -> "DependencyMatrix":
        """Build a matrix from a directed graph.

        The root comes first, remaining nodes keep graph order. Edges without
        the weight attribute count as 1.

        Args:
            graph: Directed dependency graph (edge u -> v means u depends on v).
            root: Node to place at index 0.
            weight: Edge attribute holding the dependency weight.

        Returns:
            DependencyMatrix named after each node's ``name`` attribute,
            falling back to str() of the node.

        Raises:
            ValidationError: If root is not in the graph.
        """
        if root not in graph:
            raise ValidationError(f"root {root!r} is not a node of the graph")

        order = [root] + [node for node in graph.nodes if node != root]
        position = {node: i for i, node in enumerate(order)}

        rows = [[0.0] * len(order) for _ in order]
        for u, v, w in graph.edges(data=weight, default=1):
            rows[position[u]][position[v]] = w

        names = [str(graph.nodes[node].get("name", node)) for node in order]
        return cls(names=names, weights=rows)

    @property
    def size(self) -> int:
        return len(self.weights)

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    def node(self, index: int) -> Node:
        return self._nodes[index]

    def value(self, index: int) -> Any:
        """Package (if present) or name of a node."""
        return self._nodes[index].value

    def total(self, index: int) -> float:
        """Outgoing plus incoming weight of a node, excluding the diagonal."""
        outgoing = sum(w for j, w in enumerate(self.weights[index]) if j != index)
        incoming = sum(row[index] for j, row in enumerate(self.weights) if j != index)
        return outgoing + incoming

    def dependencies(self, index: int) -> list[Any]:
        """Nodes that ``index`` depends on, in column order."""
        return [
            self.value(j)
            for j, w in enumerate(self.weights[index])
            if w and j != index
        ]

    def dependents(self, index: int) -> list[Any]:
        """Nodes that depend on ``index``, in row order."""
        return [
            self.value(i)
            for i, row in enumerate(self.weights)
            if row[index] and i != index
        ]

    def to_graph(self) -> nx.DiGraph:
        """Convert to a weighted DiGraph keyed by node index.

        Node attributes carry ``name`` and ``package``; zero entries are not
        edges. Self-loops are kept so that the round trip is lossless.
        """
        G = nx.DiGraph()
        for node in self._nodes:
            G.add_node(node.index, name=node.name, package=node.package)
        for i, row in enumerate(self.weights):
            for j, w in enumerate(row):
                if w:
                    G.add_edge(i, j, weight=w)
        logger.debug("Built graph with %d nodes and %d edges", G.number_of_nodes(), G.number_of_edges())
        return G


def _node_name(package: Any, index: int) -> str:
    """Read a display name from a package object or mapping."""
    if isinstance(package, Mapping):
        name = package.get("name")
    else:
        name = getattr(package, "name", None)
    if name is None:
        raise ValidationError(f"node {index} has no 'name' and no nodeNames were given")
    return str(name)
