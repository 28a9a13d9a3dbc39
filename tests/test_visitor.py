"""Tests for syntax.visitor traversal control."""

import pytest

from svextract.core.depth_guard import DepthLimitExceededError
from svextract.enums import VisitAction
from svextract.syntax.ast import CallExpression, Identifier, OpaqueNode
from svextract.syntax.visitor import ASTVisitor, iter_child_nodes
from tests.helpers.ast_builders import call, ident, obj, prop, template


class _NameRecorder(ASTVisitor):
    """Record identifier names; optional action on calls."""

    def __init__(self, on_call: VisitAction = VisitAction.CONTINUE, **kwargs: int) -> None:
        super().__init__(**kwargs)
        self.on_call = on_call
        self.names: list[str] = []

    def visit_Identifier(self, node: Identifier) -> VisitAction:
        self.names.append(node.name)
        return VisitAction.CONTINUE

    def visit_CallExpression(self, node: CallExpression) -> VisitAction:  # noqa: ARG002
        return self.on_call


class TestIterChildNodes:
    """Child enumeration."""

    def test_call_children_in_field_order(self) -> None:
        node = call("f", ident("a"), ident("b"))
        assert [c.name for c in iter_child_nodes(node)] == ["f", "a", "b"]  # type: ignore[union-attr]

    def test_scalars_skipped(self) -> None:
        assert list(iter_child_nodes(ident("x"))) == []

    def test_template_children(self) -> None:
        tree = template(instance=[], markup=[ident("x")])
        kinds = [type(c).__name__ for c in iter_child_nodes(tree)]
        assert kinds == ["Fragment", "Script"]


class TestWalk:
    """Tri-state traversal control."""

    def test_continue_visits_everything(self) -> None:
        visitor = _NameRecorder()
        visitor.walk(call("f", ident("a"), obj(prop("k", ident("b")))))
        assert visitor.names == ["f", "a", "k", "b"]

    def test_skip_prunes_subtree_only(self) -> None:
        visitor = _NameRecorder(on_call=VisitAction.SKIP)
        root = OpaqueNode(kind="SequenceExpression", children=(ident("a"), call("f", ident("b")), ident("c")))
        assert visitor.walk(root) is VisitAction.CONTINUE
        assert visitor.names == ["a", "c"]

    def test_stop_ends_walk(self) -> None:
        visitor = _NameRecorder(on_call=VisitAction.STOP)
        root = OpaqueNode(kind="SequenceExpression", children=(ident("a"), call("f", ident("b")), ident("c")))
        assert visitor.walk(root) is VisitAction.STOP
        assert visitor.names == ["a"]

    def test_none_root_is_noop(self) -> None:
        assert _NameRecorder().walk(None) is VisitAction.CONTINUE

    def test_opaque_kind_dispatch(self) -> None:
        class MemberCounter(ASTVisitor):
            def __init__(self) -> None:
                super().__init__()
                self.count = 0

            def visit_MemberExpression(self, node: OpaqueNode) -> VisitAction:  # noqa: ARG002
                self.count += 1
                return VisitAction.CONTINUE

        visitor = MemberCounter()
        visitor.walk(OpaqueNode(kind="MemberExpression", children=(OpaqueNode(kind="MemberExpression"),)))
        assert visitor.count == 2

    def test_depth_limit(self) -> None:
        node: OpaqueNode = OpaqueNode(kind="Leaf")
        for _ in range(20):
            node = OpaqueNode(kind="Wrapper", children=(node,))
        with pytest.raises(DepthLimitExceededError):
            _NameRecorder(max_depth=5).walk(node)

    def test_depth_guard_released_after_walk(self) -> None:
        visitor = _NameRecorder(max_depth=3)
        shallow = OpaqueNode(kind="A", children=(OpaqueNode(kind="B", children=(ident("x"),)),))
        visitor.walk(shallow)
        visitor.walk(shallow)
        assert visitor.names == ["x", "x"]
