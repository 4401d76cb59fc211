# SolCallFlow/Analyzer/SymbolCollector.py
from __future__ import annotations

from Domain.AST import *
from Domain.CallFlow import ModifierDef, AppliedModifier, FunctionDef
from Parser.SolidityVisitor import SolidityVisitor
from Analyzer.ExpressionRenderer import ExpressionRenderer
from Utils.SourceSlicer import SourceSlicer, FALLBACK, RECEIVE, CONSTRUCTOR


def function_key(node: FunctionDefinition) -> str:
    """Table key of a function; unnamed members get a sentinel."""
    if node.is_constructor:
        return CONSTRUCTOR
    if node.is_receive:
        return RECEIVE
    if node.is_fallback or not node.name:
        return FALLBACK
    return node.name


class SymbolCollector(SolidityVisitor):
    """
    One pass over the declarations of a contract.

    Tables (plain dicts, declaration order; a later same-named entry
    overwrites the earlier one):
      contract_instances : state variable → user-defined type path
      modifiers          : name → ModifierDef
      functions          : key  → FunctionDef
      function_nodes     : key  → FunctionDefinition (bodies for the resolver)
    """

    def __init__(self, slicer: SourceSlicer, renderer: ExpressionRenderer | None = None):
        self.slicer = slicer
        self.renderer = renderer or ExpressionRenderer()
        self.contract_instances: dict[str, str] = {}
        self.modifiers: dict[str, ModifierDef] = {}
        self.functions: dict[str, FunctionDef] = {}
        self.function_nodes: dict[str, FunctionDefinition] = {}

    def collect(self, contract: ContractDefinition | None) -> "SymbolCollector":
        if contract is not None:
            self.visit(contract)
        return self

    # declarations only, bodies are left to the resolver
    def visitChildren(self, node: SyntaxNode):
        return None

    def visitContractDefinition(self, node: ContractDefinition):
        for sub in node.sub_nodes:
            self.visit(sub)

    def visitStateVariableDeclaration(self, node: StateVariableDeclaration):
        for var in node.variables:
            if isinstance(var.type_name, UserDefinedTypeName):
                self.contract_instances[var.name] = var.type_name.name_path

    def visitModifierDefinition(self, node: ModifierDefinition):
        self.slicer.register(node.name, node.loc, is_modifier=True)
        self.modifiers[node.name] = ModifierDef(
            name=node.name,
            parameters=[p.name for p in node.parameters],
            source=self.slicer.source_of(node.name, is_modifier=True),
        )

    def visitFunctionDefinition(self, node: FunctionDefinition):
        key = function_key(node)
        self.slicer.register(key, node.loc)
        applied = [AppliedModifier(m.name, self.renderer.render_arguments(m.arguments))
                   for m in node.modifiers]
        self.functions[key] = FunctionDef(
            name=key,
            parameters=[p.name for p in node.parameters],
            modifiers=applied,
            source=self.slicer.source_of(key),
        )
        self.function_nodes[key] = node
