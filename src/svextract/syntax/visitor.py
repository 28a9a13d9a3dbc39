"""Visitor pattern for syntax tree traversal.

Walkers decide per node whether to descend, skip the node's children, or
stop the whole walk, by returning a VisitAction from the visit method.
This keeps collectors independent of any particular tree-walking library
and testable against hand-built trees.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name
(snake_case), where NodeName is the node class name (or the kind of an
OpaqueNode, e.g. visit_MemberExpression).

Python 3.13+.
"""

from collections.abc import Callable, Iterator
from dataclasses import Field, fields
from typing import ClassVar

from svextract.constants import MAX_DEPTH
from svextract.core.depth_guard import DepthGuard
from svextract.enums import VisitAction

from .ast import ASTNode, node_kind

__all__ = ["ASTVisitor", "iter_child_nodes"]

# Fields that carry positions or plain data, never child nodes
_NON_CHILD_FIELDS = frozenset({"loc", "filename", "context", "lang", "kind", "raw"})

_fields_cache: dict[type, tuple[Field[object], ...]] = {}


def _node_fields(node_type: type) -> tuple[Field[object], ...]:
    if node_type not in _fields_cache:
        _fields_cache[node_type] = tuple(
            f for f in fields(node_type) if f.name not in _NON_CHILD_FIELDS
        )
    return _fields_cache[node_type]


def iter_child_nodes(node: ASTNode) -> Iterator[ASTNode]:
    """Yield the direct children of node in field order.

    Tuple fields yield each element; scalar fields (str, int, bool, None)
    are skipped.
    """
    for field in _node_fields(type(node)):
        value = getattr(node, field.name)

        if value is None or isinstance(value, (str, int, float, bool)):
            continue

        if isinstance(value, tuple):
            for item in value:
                if hasattr(item, "__dataclass_fields__"):
                    yield item
        elif hasattr(value, "__dataclass_fields__"):
            yield value


class ASTVisitor:
    """Base visitor for walking component syntax trees.

    Override visit_NodeType methods and return a VisitAction:
    - CONTINUE: descend into the node's children
    - SKIP: do not descend; continue with the next sibling
    - STOP: end the walk

    Uses class-level dispatch table:
    - Dispatch table built once per class definition via __init_subclass__
    - Falls back to instance-level cache for bound methods

    Example:
        >>> class CountCallsVisitor(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_CallExpression(self, node: CallExpression) -> VisitAction:
        ...         self.count += 1
        ...         return VisitAction.CONTINUE
        ...
        >>> visitor = CountCallsVisitor()
        >>> visitor.walk(template.instance)
        >>> print(visitor.count)
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    _class_visit_methods: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_"):
                # "visit_CallExpression" -> "CallExpression"
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum walk depth (default: MAX_DEPTH from constants)
        """
        self._depth_guard = DepthGuard(max_depth=max_depth if max_depth is not None else MAX_DEPTH)
        self._instance_dispatch_cache: dict[str, Callable[[ASTNode], VisitAction]] = {}

    def visit(self, node: ASTNode) -> VisitAction:
        """Dispatch node to its visit_* method (or generic_visit).

        Args:
            node: Node to visit

        Returns:
            Traversal instruction for this node
        """
        kind = node_kind(node)

        if kind in self._instance_dispatch_cache:
            return self._instance_dispatch_cache[kind](node)

        if kind in self._class_visit_methods:
            method = getattr(self, self._class_visit_methods[kind])
        else:
            method = self.generic_visit

        self._instance_dispatch_cache[kind] = method
        return method(node)  # type: ignore[no-any-return]  # getattr returns Any

    def generic_visit(self, node: ASTNode) -> VisitAction:  # noqa: ARG002
        """Default visit: descend into children."""
        return VisitAction.CONTINUE

    def walk(self, root: ASTNode | None) -> VisitAction:
        """Depth-first walk starting at root.

        A None root (absent script section) is a no-op.

        Args:
            root: Node to start from

        Returns:
            STOP if the walk was aborted, CONTINUE otherwise

        Raises:
            DepthLimitExceededError: If the tree is nested deeper than max_depth
        """
        if root is None:
            return VisitAction.CONTINUE

        action = self.visit(root)
        if action is VisitAction.STOP:
            return VisitAction.STOP
        if action is VisitAction.SKIP:
            return VisitAction.CONTINUE

        with self._depth_guard:
            for child in iter_child_nodes(root):
                if self.walk(child) is VisitAction.STOP:
                    return VisitAction.STOP
        return VisitAction.CONTINUE
