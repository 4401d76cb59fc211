# SolCallFlow/Domain/AST.py
"""
Syntax tree built by Parser.AstBuilder from the solidity_parser node dicts.

Every node kind is a class below with
  * `kind`        : tag string (same tag names as @solidity-parser/parser)
  * `child_slots` : the attributes holding child nodes, in source order
  * `accept()`    : explicit double dispatch into a SolidityVisitor
Kinds without a class of their own become GenericNode.
Nodes are never mutated once built.
"""
from __future__ import annotations


class SourceLocation:
    def __init__(self, start_line: int, start_column: int,
                 end_line: int, end_column: int):
        self.start_line = start_line        # 1-based
        self.start_column = start_column    # 0-based
        self.end_line = end_line            # line of the last token
        self.end_column = end_column        # column where the last token starts

    def __repr__(self):
        return (f"SourceLocation({self.start_line}:{self.start_column}"
                f"-{self.end_line}:{self.end_column})")


class SyntaxNode:
    kind = "SyntaxNode"
    child_slots: tuple[str, ...] = ()

    def __init__(self, loc: SourceLocation | None = None):
        self.loc = loc

    def children(self):
        """Child nodes in slot order; list slots are flattened, empty entries skipped."""
        for slot in self.child_slots:
            value = getattr(self, slot)
            if value is None:
                continue
            if isinstance(value, list):
                for item in value:
                    if item is not None:
                        yield item
            else:
                yield value

    def accept(self, visitor):
        return visitor.visitChildren(self)

    def __repr__(self):
        return f"<{self.kind}>"


class GenericNode(SyntaxNode):
    """Any other node kind; its child nodes are kept in source order."""
    child_slots = ("nodes",)

    def __init__(self, kind: str, nodes, loc=None):
        super().__init__(loc)
        self.kind = kind
        self.nodes = nodes


# ─────────────────────────────────────────────── source unit / declarations
class SourceUnit(SyntaxNode):
    kind = "SourceUnit"
    child_slots = ("children_nodes",)

    def __init__(self, children_nodes, loc=None):
        super().__init__(loc)
        self.children_nodes = children_nodes

    def accept(self, visitor):
        return visitor.visitSourceUnit(self)


class PragmaDirective(SyntaxNode):
    kind = "PragmaDirective"

    def __init__(self, name, value, loc=None):
        super().__init__(loc)
        self.name = name
        self.value = value

    def accept(self, visitor):
        return visitor.visitPragmaDirective(self)


class ImportDirective(SyntaxNode):
    kind = "ImportDirective"

    def __init__(self, path, unit_alias=None, symbol_aliases=None, loc=None):
        super().__init__(loc)
        self.path = path
        self.unit_alias = unit_alias
        self.symbol_aliases = symbol_aliases or []   # [(symbol, alias|None)]

    def accept(self, visitor):
        return visitor.visitImportDirective(self)


class ContractDefinition(SyntaxNode):
    kind = "ContractDefinition"
    child_slots = ("base_contracts", "sub_nodes")

    def __init__(self, name, contract_kind, base_contracts, sub_nodes, loc=None):
        super().__init__(loc)
        self.name = name
        self.contract_kind = contract_kind   # 'contract' | 'abstract' | 'interface' | 'library'
        self.base_contracts = base_contracts
        self.sub_nodes = sub_nodes

    def accept(self, visitor):
        return visitor.visitContractDefinition(self)


class InheritanceSpecifier(SyntaxNode):
    kind = "InheritanceSpecifier"
    child_slots = ("base_name", "arguments")

    def __init__(self, base_name, arguments, loc=None):
        super().__init__(loc)
        self.base_name = base_name
        self.arguments = arguments

    def accept(self, visitor):
        return visitor.visitInheritanceSpecifier(self)


class UsingForDeclaration(SyntaxNode):
    kind = "UsingForDeclaration"
    child_slots = ("type_name",)

    def __init__(self, library_name, type_name, loc=None):
        super().__init__(loc)
        self.library_name = library_name
        self.type_name = type_name           # None means `*`

    def accept(self, visitor):
        return visitor.visitUsingForDeclaration(self)


class StructDefinition(SyntaxNode):
    kind = "StructDefinition"
    child_slots = ("members",)

    def __init__(self, name, members, loc=None):
        super().__init__(loc)
        self.name = name
        self.members = members

    def accept(self, visitor):
        return visitor.visitStructDefinition(self)


class EnumDefinition(SyntaxNode):
    kind = "EnumDefinition"

    def __init__(self, name, members, loc=None):
        super().__init__(loc)
        self.name = name
        self.members = members               # plain names

    def accept(self, visitor):
        return visitor.visitEnumDefinition(self)


class EventDefinition(SyntaxNode):
    kind = "EventDefinition"
    child_slots = ("parameters",)

    def __init__(self, name, parameters, is_anonymous=False, loc=None):
        super().__init__(loc)
        self.name = name
        self.parameters = parameters
        self.is_anonymous = is_anonymous

    def accept(self, visitor):
        return visitor.visitEventDefinition(self)


class CustomErrorDefinition(SyntaxNode):
    kind = "CustomErrorDefinition"
    child_slots = ("parameters",)

    def __init__(self, name, parameters, loc=None):
        super().__init__(loc)
        self.name = name
        self.parameters = parameters

    def accept(self, visitor):
        return visitor.visitCustomErrorDefinition(self)


class TypeDefinition(SyntaxNode):
    kind = "TypeDefinition"
    child_slots = ("definition",)

    def __init__(self, name, definition, loc=None):
        super().__init__(loc)
        self.name = name
        self.definition = definition

    def accept(self, visitor):
        return visitor.visitTypeDefinition(self)


class StateVariableDeclaration(SyntaxNode):
    kind = "StateVariableDeclaration"
    child_slots = ("variables", "initial_value")

    def __init__(self, variables, initial_value, loc=None):
        super().__init__(loc)
        self.variables = variables
        self.initial_value = initial_value

    def accept(self, visitor):
        return visitor.visitStateVariableDeclaration(self)


class VariableDeclaration(SyntaxNode):
    """State variables, parameters, struct members and locals all share this node."""
    kind = "VariableDeclaration"
    child_slots = ("type_name", "expression")

    def __init__(self, name, type_name, expression=None, visibility=None,
                 storage_location=None, is_state_var=False,
                 is_declared_const=False, is_indexed=False,
                 loc=None):
        super().__init__(loc)
        self.name = name
        self.type_name = type_name
        self.expression = expression
        self.visibility = visibility
        self.storage_location = storage_location
        self.is_state_var = is_state_var
        self.is_declared_const = is_declared_const
        self.is_indexed = is_indexed

    def accept(self, visitor):
        return visitor.visitVariableDeclaration(self)


class ModifierDefinition(SyntaxNode):
    kind = "ModifierDefinition"
    child_slots = ("parameters", "body")

    def __init__(self, name, parameters, body, loc=None):
        super().__init__(loc)
        self.name = name
        self.parameters = parameters
        self.body = body

    def accept(self, visitor):
        return visitor.visitModifierDefinition(self)


class ModifierInvocation(SyntaxNode):
    kind = "ModifierInvocation"
    child_slots = ("arguments",)

    def __init__(self, name, arguments, loc=None):
        super().__init__(loc)
        self.name = name
        self.arguments = arguments           # None when invoked without parentheses

    def accept(self, visitor):
        return visitor.visitModifierInvocation(self)


class FunctionDefinition(SyntaxNode):
    kind = "FunctionDefinition"
    child_slots = ("parameters", "return_parameters", "modifiers", "body")

    def __init__(self, name, parameters, return_parameters, body,
                 visibility=None, modifiers=None, state_mutability=None,
                 is_constructor=False, is_fallback=False, is_receive=False,
                 loc=None):
        super().__init__(loc)
        self.name = name                     # None for constructor / fallback / receive
        self.parameters = parameters
        self.return_parameters = return_parameters
        self.body = body                     # None for declarations without implementation
        self.visibility = visibility
        self.modifiers = modifiers or []
        self.state_mutability = state_mutability
        self.is_constructor = is_constructor
        self.is_fallback = is_fallback
        self.is_receive = is_receive

    def accept(self, visitor):
        return visitor.visitFunctionDefinition(self)


# ─────────────────────────────────────────────── type names
class ElementaryTypeName(SyntaxNode):
    kind = "ElementaryTypeName"

    def __init__(self, name, state_mutability=None, loc=None):
        super().__init__(loc)
        self.name = name
        self.state_mutability = state_mutability   # 'payable' for `address payable`

    def accept(self, visitor):
        return visitor.visitElementaryTypeName(self)


class UserDefinedTypeName(SyntaxNode):
    kind = "UserDefinedTypeName"

    def __init__(self, name_path, loc=None):
        super().__init__(loc)
        self.name_path = name_path

    def accept(self, visitor):
        return visitor.visitUserDefinedTypeName(self)


class Mapping(SyntaxNode):
    kind = "Mapping"
    child_slots = ("key_type", "value_type")

    def __init__(self, key_type, value_type, loc=None):
        super().__init__(loc)
        self.key_type = key_type
        self.value_type = value_type

    def accept(self, visitor):
        return visitor.visitMapping(self)


class ArrayTypeName(SyntaxNode):
    kind = "ArrayTypeName"
    child_slots = ("base_type_name", "length")

    def __init__(self, base_type_name, length=None, loc=None):
        super().__init__(loc)
        self.base_type_name = base_type_name
        self.length = length

    def accept(self, visitor):
        return visitor.visitArrayTypeName(self)


class FunctionTypeName(SyntaxNode):
    kind = "FunctionTypeName"
    child_slots = ("parameter_types", "return_types")

    def __init__(self, parameter_types, return_types, visibility=None,
                 state_mutability=None, loc=None):
        super().__init__(loc)
        self.parameter_types = parameter_types
        self.return_types = return_types
        self.visibility = visibility
        self.state_mutability = state_mutability

    def accept(self, visitor):
        return visitor.visitFunctionTypeName(self)


# ─────────────────────────────────────────────── statements
class Block(SyntaxNode):
    kind = "Block"
    child_slots = ("statements",)

    def __init__(self, statements, unchecked=False, loc=None):
        super().__init__(loc)
        self.statements = statements
        self.unchecked = unchecked

    def accept(self, visitor):
        return visitor.visitBlock(self)


class ExpressionStatement(SyntaxNode):
    kind = "ExpressionStatement"
    child_slots = ("expression",)

    def __init__(self, expression, loc=None):
        super().__init__(loc)
        self.expression = expression

    def accept(self, visitor):
        return visitor.visitExpressionStatement(self)


class VariableDeclarationStatement(SyntaxNode):
    kind = "VariableDeclarationStatement"
    child_slots = ("variables", "initial_value")

    def __init__(self, variables, initial_value, loc=None):
        super().__init__(loc)
        self.variables = variables           # tuple gaps are None
        self.initial_value = initial_value

    def accept(self, visitor):
        return visitor.visitVariableDeclarationStatement(self)


class IfStatement(SyntaxNode):
    kind = "IfStatement"
    child_slots = ("condition", "true_body", "false_body")

    def __init__(self, condition, true_body, false_body=None, loc=None):
        super().__init__(loc)
        self.condition = condition
        self.true_body = true_body
        self.false_body = false_body

    def accept(self, visitor):
        return visitor.visitIfStatement(self)


class ForStatement(SyntaxNode):
    kind = "ForStatement"
    child_slots = ("init_expression", "condition_expression", "loop_expression", "body")

    def __init__(self, init_expression, condition_expression, loop_expression, body, loc=None):
        super().__init__(loc)
        self.init_expression = init_expression
        self.condition_expression = condition_expression
        self.loop_expression = loop_expression
        self.body = body

    def accept(self, visitor):
        return visitor.visitForStatement(self)


class WhileStatement(SyntaxNode):
    kind = "WhileStatement"
    child_slots = ("condition", "body")

    def __init__(self, condition, body, loc=None):
        super().__init__(loc)
        self.condition = condition
        self.body = body

    def accept(self, visitor):
        return visitor.visitWhileStatement(self)


class DoWhileStatement(SyntaxNode):
    kind = "DoWhileStatement"
    child_slots = ("body", "condition")

    def __init__(self, body, condition, loc=None):
        super().__init__(loc)
        self.body = body
        self.condition = condition

    def accept(self, visitor):
        return visitor.visitDoWhileStatement(self)


class EmitStatement(SyntaxNode):
    kind = "EmitStatement"
    child_slots = ("event_call",)

    def __init__(self, event_call, loc=None):
        super().__init__(loc)
        self.event_call = event_call

    def accept(self, visitor):
        return visitor.visitEmitStatement(self)


class RevertStatement(SyntaxNode):
    kind = "RevertStatement"
    child_slots = ("revert_call",)

    def __init__(self, revert_call, loc=None):
        super().__init__(loc)
        self.revert_call = revert_call

    def accept(self, visitor):
        return visitor.visitRevertStatement(self)


class TryStatement(SyntaxNode):
    kind = "TryStatement"
    child_slots = ("expression", "return_parameters", "body", "catch_clauses")

    def __init__(self, expression, return_parameters, body, catch_clauses, loc=None):
        super().__init__(loc)
        self.expression = expression
        self.return_parameters = return_parameters
        self.body = body
        self.catch_clauses = catch_clauses

    def accept(self, visitor):
        return visitor.visitTryStatement(self)


class CatchClause(SyntaxNode):
    kind = "CatchClause"
    child_slots = ("parameters", "body")

    def __init__(self, clause_kind, parameters, body, loc=None):
        super().__init__(loc)
        self.clause_kind = clause_kind       # None | 'Error' | 'Panic'
        self.parameters = parameters
        self.body = body

    def accept(self, visitor):
        return visitor.visitCatchClause(self)


class InlineAssemblyStatement(SyntaxNode):
    kind = "InlineAssemblyStatement"

    def __init__(self, language=None, loc=None):
        super().__init__(loc)
        self.language = language             # `assembly "evmasm" { ... }`

    def accept(self, visitor):
        return visitor.visitInlineAssemblyStatement(self)


class ThrowStatement(SyntaxNode):
    kind = "ThrowStatement"

    def accept(self, visitor):
        return visitor.visitThrowStatement(self)


# ─────────────────────────────────────────────── expressions
class Identifier(SyntaxNode):
    kind = "Identifier"

    def __init__(self, name, loc=None):
        super().__init__(loc)
        self.name = name

    def accept(self, visitor):
        return visitor.visitIdentifier(self)


class NumberLiteral(SyntaxNode):
    kind = "NumberLiteral"

    def __init__(self, number, subdenomination=None, loc=None):
        super().__init__(loc)
        self.number = number
        self.subdenomination = subdenomination

    def accept(self, visitor):
        return visitor.visitNumberLiteral(self)


class StringLiteral(SyntaxNode):
    kind = "StringLiteral"

    def __init__(self, value, loc=None):
        super().__init__(loc)
        self.value = value

    def accept(self, visitor):
        return visitor.visitStringLiteral(self)


class HexLiteral(SyntaxNode):
    kind = "HexLiteral"

    def __init__(self, value, loc=None):
        super().__init__(loc)
        self.value = value

    def accept(self, visitor):
        return visitor.visitHexLiteral(self)


class BooleanLiteral(SyntaxNode):
    kind = "BooleanLiteral"

    def __init__(self, value, loc=None):
        super().__init__(loc)
        self.value = value

    def accept(self, visitor):
        return visitor.visitBooleanLiteral(self)


class MemberAccess(SyntaxNode):
    kind = "MemberAccess"
    child_slots = ("expression",)

    def __init__(self, expression, member_name, loc=None):
        super().__init__(loc)
        self.expression = expression
        self.member_name = member_name

    def accept(self, visitor):
        return visitor.visitMemberAccess(self)


class IndexAccess(SyntaxNode):
    kind = "IndexAccess"
    child_slots = ("base", "index")

    def __init__(self, base, index, loc=None):
        super().__init__(loc)
        self.base = base
        self.index = index                   # None for `T[]` in type position

    def accept(self, visitor):
        return visitor.visitIndexAccess(self)


class IndexRangeAccess(SyntaxNode):
    kind = "IndexRangeAccess"
    child_slots = ("base", "index_start", "index_end")

    def __init__(self, base, index_start, index_end, loc=None):
        super().__init__(loc)
        self.base = base
        self.index_start = index_start
        self.index_end = index_end

    def accept(self, visitor):
        return visitor.visitIndexRangeAccess(self)


class FunctionCall(SyntaxNode):
    kind = "FunctionCall"
    child_slots = ("expression", "arguments")

    def __init__(self, expression, arguments, names=None, loc=None):
        super().__init__(loc)
        self.expression = expression
        self.arguments = arguments
        self.names = names or []             # named-argument call `f({a: 1})`

    def accept(self, visitor):
        return visitor.visitFunctionCall(self)


class FunctionCallOptions(SyntaxNode):
    kind = "FunctionCallOptions"
    child_slots = ("expression", "values")

    def __init__(self, expression, names, values, loc=None):
        super().__init__(loc)
        self.expression = expression
        self.names = names
        self.values = values

    def accept(self, visitor):
        return visitor.visitFunctionCallOptions(self)


class BinaryOperation(SyntaxNode):
    """Also carries assignments (`=`, `+=`, ...)."""
    kind = "BinaryOperation"
    child_slots = ("left", "right")

    def __init__(self, operator, left, right, loc=None):
        super().__init__(loc)
        self.operator = operator
        self.left = left
        self.right = right

    def accept(self, visitor):
        return visitor.visitBinaryOperation(self)


class UnaryOperation(SyntaxNode):
    kind = "UnaryOperation"
    child_slots = ("sub_expression",)

    def __init__(self, operator, sub_expression, is_prefix=True, loc=None):
        super().__init__(loc)
        self.operator = operator
        self.sub_expression = sub_expression
        self.is_prefix = is_prefix

    def accept(self, visitor):
        return visitor.visitUnaryOperation(self)


class Conditional(SyntaxNode):
    kind = "Conditional"
    child_slots = ("condition", "true_expression", "false_expression")

    def __init__(self, condition, true_expression, false_expression, loc=None):
        super().__init__(loc)
        self.condition = condition
        self.true_expression = true_expression
        self.false_expression = false_expression

    def accept(self, visitor):
        return visitor.visitConditional(self)


class TupleExpression(SyntaxNode):
    kind = "TupleExpression"
    child_slots = ("components",)

    def __init__(self, components, is_array=False, loc=None):
        super().__init__(loc)
        self.components = components         # gaps are None
        self.is_array = is_array

    def accept(self, visitor):
        return visitor.visitTupleExpression(self)


class NewExpression(SyntaxNode):
    kind = "NewExpression"
    child_slots = ("type_name",)

    def __init__(self, type_name, loc=None):
        super().__init__(loc)
        self.type_name = type_name

    def accept(self, visitor):
        return visitor.visitNewExpression(self)


class ElementaryTypeNameExpression(SyntaxNode):
    kind = "ElementaryTypeNameExpression"
    child_slots = ("type_name",)

    def __init__(self, type_name, loc=None):
        super().__init__(loc)
        self.type_name = type_name

    def accept(self, visitor):
        return visitor.visitElementaryTypeNameExpression(self)
