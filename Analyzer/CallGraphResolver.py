# SolCallFlow/Analyzer/CallGraphResolver.py
from __future__ import annotations

from Domain.AST import *
from Domain.CallFlow import (CallEdge, InternalCall, ExternalCall, LibraryCall,
                             FunctionDef, VariableBinding)
from Analyzer.ExpressionRenderer import ExpressionRenderer
from Utils.SourceSlicer import SourceSlicer

# factory function → (synthetic instance handle, contract type)
DEFAULT_FACTORY_BINDINGS: dict[str, tuple[str, str]] = {
    "getTroveManager": ("getTroveManager()", "ITroveManager"),
}


def looks_like_library(name: str) -> bool:
    return name[:1].isupper()


class TraversalGuard:
    """
    Cycle guard of one top-level resolution.

    in_progress : functions currently being expanded (ancestor stack)
    finished    : name → (edges, footprint) of expansions that can be reused

    Every frame tracks the lowest stack index any cycle cut beneath it pointed
    to, and the footprint (all function names its expansion pushed or cut).
    A function is recorded as finished only when no cut inside it reached one
    of its ancestors; it is reused only while its footprint is disjoint from
    the current stack.  Under those two conditions the reused edge list equals
    what a fresh expansion would produce.
    """

    def __init__(self):
        self.in_progress: list[str] = []
        self.finished: dict[str, tuple[list[CallEdge], frozenset[str]]] = {}
        self._frames: list[list] = []          # [low, footprint]

    def is_active(self, name: str) -> bool:
        return name in self.in_progress

    def enter(self, name: str):
        self.in_progress.append(name)
        self._frames.append([len(self.in_progress) - 1, {name}])

    def cut(self, name: str):
        frame = self._frames[-1]
        frame[0] = min(frame[0], self.in_progress.index(name))
        frame[1].add(name)

    def reuse(self, name: str) -> list[CallEdge] | None:
        entry = self.finished.get(name)
        if entry is None:
            return None
        edges, footprint = entry
        if not footprint.isdisjoint(self.in_progress):
            return None
        if self._frames:
            self._frames[-1][1].update(footprint)
        return edges

    def leave(self, edges: list[CallEdge]):
        name = self.in_progress.pop()
        low, footprint = self._frames.pop()
        depth = len(self.in_progress)
        if low >= depth:
            self.finished[name] = (edges, frozenset(footprint))
        if self._frames:
            parent = self._frames[-1]
            parent[0] = min(parent[0], low)
            parent[1].update(footprint)




class _Activation:
    """One function body being walked: pending nodes, local bindings, edges so far."""

    def __init__(self, name: str, body: SyntaxNode, edge: InternalCall | None):
        self.name = name
        self.pending: list[SyntaxNode] = [body]     # pre-order work stack
        self.bindings: dict[str, VariableBinding] = {}
        self.edges: list[CallEdge] = []
        self.edge = edge                            # receives `edges` once the body is done


class CallGraphResolver:
    """
    Classifies the call sites of a function body and expands internal calls
    into nested edge lists.

    Bodies are walked with an explicit activation stack, so call chains and
    statement nesting are bounded by memory rather than by the interpreter's
    recursion limit.  Tables are shared read-only; each `resolve()` owns a
    fresh TraversalGuard.
    """

    def __init__(self, functions: dict[str, FunctionDef],
                 function_nodes: dict[str, FunctionDefinition],
                 contract_instances: dict[str, str],
                 slicer: SourceSlicer,
                 renderer: ExpressionRenderer | None = None,
                 factory_bindings: dict[str, tuple[str, str]] | None = None):
        self.functions = functions
        self.function_nodes = function_nodes
        self.contract_instances = contract_instances
        self.slicer = slicer
        self.renderer = renderer or ExpressionRenderer()
        self.factory_bindings = (DEFAULT_FACTORY_BINDINGS if factory_bindings is None
                                 else factory_bindings)

    def resolve(self, name: str) -> list[CallEdge]:
        return self.expand(name, TraversalGuard())

    def expand(self, name: str, guard: TraversalGuard) -> list[CallEdge]:
        reused = guard.reuse(name)
        if reused is not None:
            return reused
        root = self._activate(name, None, guard)
        if root is None:
            return []

        stack = [root]
        while stack:
            act = stack[-1]
            if not act.pending:
                stack.pop()
                guard.leave(act.edges)
                if act.edge is not None:
                    act.edge.calls = act.edges
                continue

            node = act.pending.pop()
            if isinstance(node, VariableDeclarationStatement):
                self._bind(node, act)
            act.pending.extend(reversed(list(node.children())))
            if isinstance(node, FunctionCall):
                callee = self.classify(node, act, guard)
                if callee is not None:
                    stack.append(callee)
        return root.edges

    def _activate(self, name: str, edge: InternalCall | None,
                  guard: TraversalGuard) -> _Activation | None:
        node = self.function_nodes.get(name)
        if node is None or node.body is None:
            return None
        guard.enter(name)
        return _Activation(name, node.body, edge)

    def internal_edge(self, target: str, arguments: list[str],
                      guard: TraversalGuard) -> tuple[InternalCall, _Activation | None]:
        """The edge, plus the activation that still has to fill its `calls`."""
        edge = InternalCall(target, arguments, self.slicer.source_of(target))
        if guard.is_active(target):
            guard.cut(target)                   # recorded once, not expanded
            return edge, None
        reused = guard.reuse(target)
        if reused is not None:
            edge.calls = reused
            return edge, None
        return edge, self._activate(target, edge, guard)

    def _bind(self, node: VariableDeclarationStatement, act: _Activation):
        init = node.initial_value
        if isinstance(init, FunctionCall) and isinstance(init.expression, Identifier):
            factory = self.factory_bindings.get(init.expression.name)
            first = node.variables[0] if node.variables else None
            if factory is not None and first is not None and first.name:
                act.bindings[first.name] = VariableBinding(first.name, *factory)

    def classify(self, call: FunctionCall, act: _Activation,
                 guard: TraversalGuard) -> _Activation | None:
        callee = call.expression
        while isinstance(callee, FunctionCallOptions):
            callee = callee.expression

        render = lambda: self.renderer.render_arguments(call.arguments)

        if isinstance(callee, Identifier):
            if callee.name in self.functions:
                edge, activation = self.internal_edge(callee.name, render(), guard)
                act.edges.append(edge)
                return activation
            return None

        if not isinstance(callee, MemberAccess):
            return None
        receiver = callee.expression
        method = callee.member_name

        if isinstance(receiver, Identifier):
            name = receiver.name
            instance_type = self.contract_instances.get(name)
            if instance_type is None and looks_like_library(name):
                act.edges.append(LibraryCall(name, method, render()))
            elif instance_type is not None:
                act.edges.append(ExternalCall(name, instance_type, method, render()))
            # independent of the instance table: both may fire
            binding = act.bindings.get(name)
            if binding is not None:
                act.edges.append(ExternalCall(binding.instance, binding.contract_type,
                                              method, render()))

        elif isinstance(receiver, MemberAccess):
            chain = [method]
            root = receiver
            while isinstance(root, MemberAccess):
                chain.insert(0, root.member_name)
                root = root.expression
            if isinstance(root, Identifier) and looks_like_library(root.name):
                act.edges.append(LibraryCall(root.name, ".".join(chain), render()))
        return None
