# SolCallFlow/Parser/AstBuilder.py
"""
solidity_parser output → Domain.AST.

solidity_parser's AstVisitor turns the ANTLR parse tree into dict nodes shaped
like @solidity-parser/parser ({"type": ..., "loc": ..., <fields>}).
AstBuilder maps those dicts onto the Domain.AST classes; kinds without a class
become GenericNode so the nodes below them stay reachable.
"""
from __future__ import annotations

from antlr4.error.ErrorListener import ErrorListener
from antlr4.tree.Tree import TerminalNode
from solidity_parser.parser import AstVisitor, Node

from Domain.AST import *


class SolidityParseError(ValueError):
    """Source text the Solidity grammar rejects."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{line}:{column} {message}"
        super().__init__(message)


class RaisingErrorListener(ErrorListener):
    """The first lexer or parser error aborts the whole parse."""

    def syntaxError(self, recognizer, offendingSymbol, line, column, msg, e):
        raise SolidityParseError(msg, line, column)


class CallFlowAstVisitor(AstVisitor):
    """solidity_parser's AstVisitor plus the expression forms it leaves unmapped."""

    def visitExpression(self, ctx):
        children = ctx.children or []

        # base '[' start? ':' end? ']'
        if (len(children) >= 4 and children[1].getText() == "["
                and any(isinstance(c, TerminalNode) and c.getText() == ":" for c in children[2:-1])):
            start = end = None
            after_colon = False
            for child in children[2:-1]:
                if isinstance(child, TerminalNode):
                    after_colon = True
                elif after_colon:
                    end = self.visit(child)
                else:
                    start = self.visit(child)
            return Node(ctx=ctx,
                        type="IndexRangeAccess",
                        base=self.visit(children[0]),
                        indexStart=start,
                        indexEnd=end)

        # callee '{' name: value, ... '}'
        if len(children) == 4 and children[1].getText() == "{":
            names, values = [], []
            for name_value in ctx.nameValueList().nameValue():
                names.append(name_value.identifier().getText())
                values.append(self.visit(name_value.expression()))
            return Node(ctx=ctx,
                        type="FunctionCallOptions",
                        expression=self.visit(children[0]),
                        names=names,
                        arguments=values)

        return super().visitExpression(ctx)

    def visitThrowStatement(self, ctx):
        return Node(ctx=ctx, type="ThrowStatement")

    def visitTypeDefinition(self, ctx):
        node = super().visitTypeDefinition(ctx)
        node["name"] = ctx.identifier().getText()
        return node


def _location(loc) -> SourceLocation | None:
    if not loc:
        return None
    start, end = loc["start"], loc["end"]
    return SourceLocation(start["line"], start["column"], end["line"], end["column"])


def _as_list(value) -> list:
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    return []


def _visibility(value) -> str | None:
    # solidity_parser reports an omitted visibility as "default"
    return None if value == "default" else value


def _name(value) -> str | None:
    # some declarations carry their name as an Identifier node
    if isinstance(value, dict):
        return value.get("name")
    return value


class AstBuilder:
    """Maps one solidity_parser node tree onto Domain.AST."""

    def build(self, value) -> SyntaxNode | None:
        if not isinstance(value, dict):
            return None
        v = value.get
        loc = _location(v("loc"))
        expr = self.expr

        match v("type"):
            # ── source unit / declarations
            case "SourceUnit":
                return SourceUnit(self.build_list(v("children")), loc)
            case "PragmaDirective":
                return PragmaDirective(v("name"), v("value"), loc)
            case "ImportDirective":
                aliases = list((v("symbolAliases") or {}).items())
                return ImportDirective(v("path"), v("unitAlias"), aliases, loc)
            case "ContractDefinition":
                return ContractDefinition(v("name"), v("kind"), self.build_list(v("baseContracts")),
                                          self.build_list(v("subNodes")), loc)
            case "InheritanceSpecifier":
                return InheritanceSpecifier(self.build(v("baseName")),
                                            [expr(a) for a in _as_list(v("arguments"))], loc)
            case "UsingForDeclaration":
                return UsingForDeclaration(v("libraryName"), self.build(v("typeName")), loc=loc)
            case "StructDefinition":
                return StructDefinition(v("name"), self.build_list(v("members")), loc)
            case "EnumDefinition":
                return EnumDefinition(v("name"), [_name(m) for m in _as_list(v("members"))], loc)
            case "EventDefinition":
                return EventDefinition(v("name"), self.parameters(v("parameters")),
                                       bool(v("isAnonymous")), loc)
            case "CustomErrorDefinition":
                return CustomErrorDefinition(_name(v("name")), self.parameters(v("parameterList")), loc)
            case "TypeDefinition":
                return TypeDefinition(_name(v("name")), self.build(v("elementaryTypeName")), loc)
            case "StateVariableDeclaration":
                return StateVariableDeclaration(self.build_list(v("variables")),
                                                expr(v("initialValue")), loc)
            case "VariableDeclaration" | "Parameter":
                return VariableDeclaration(
                    v("name"), self.build(v("typeName")), expr(v("expression")),
                    visibility=_visibility(v("visibility")),
                    storage_location=v("storageLocation"),
                    is_state_var=bool(v("isStateVar")),
                    is_declared_const=bool(v("isDeclaredConst")),
                    is_indexed=bool(v("isIndexed")),
                    loc=loc,
                )
            case "ModifierDefinition":
                return ModifierDefinition(v("name"), self.parameters(v("parameters")),
                                          self.build(v("body")), loc=loc)
            case "ModifierInvocation":
                return ModifierInvocation(v("name"), [expr(a) for a in _as_list(v("arguments"))], loc)
            case "FunctionDefinition":
                return self.function_definition(value, loc)

            # ── type names
            case "ElementaryTypeName":
                return ElementaryTypeName(v("name"), v("stateMutability"), loc)
            case "UserDefinedTypeName":
                return UserDefinedTypeName(v("namePath"), loc)
            case "Mapping":
                return Mapping(self.build(v("keyType")), self.build(v("valueType")), loc=loc)
            case "ArrayTypeName":
                return ArrayTypeName(self.build(v("baseTypeName")), expr(v("length")), loc)
            case "FunctionTypeName":
                return FunctionTypeName(self.build_list(v("parameterTypes")),
                                        self.build_list(v("returnTypes")),
                                        v("visibility"), v("stateMutability"), loc)

            # ── statements
            case "Block":
                return Block(self.build_list(v("statements")), loc=loc)
            case "UncheckedStatement":
                body = v("body") or {}
                return Block(self.build_list(body.get("statements")), unchecked=True, loc=loc)
            case "ExpressionStatement":
                return ExpressionStatement(expr(v("expression")), loc)
            case "VariableDeclarationStatement":
                # tuple gaps stay None
                return VariableDeclarationStatement([self.build(d) for d in v("variables") or []],
                                                    expr(v("initialValue")), loc)
            case "IfStatement":
                return IfStatement(expr(v("condition")), self.build(v("TrueBody")),
                                   self.build(v("FalseBody")), loc)
            case "ForStatement":
                return ForStatement(self.build(v("initExpression")), expr(v("conditionExpression")),
                                    self.build(v("loopExpression")), self.build(v("body")), loc)
            case "WhileStatement":
                return WhileStatement(expr(v("condition")), self.build(v("body")), loc)
            case "DoWhileStatement":
                return DoWhileStatement(self.build(v("body")), expr(v("condition")), loc)
            case "EmitStatement":
                return EmitStatement(expr(v("eventCall")), loc)
            case "RevertStatement":
                return RevertStatement(expr(v("functionCall")), loc)
            case "ThrowStatement":
                return ThrowStatement(loc)
            case "TryStatement":
                return TryStatement(expr(v("expression")), self.parameters(v("returnParameters")),
                                    self.build(v("block")), self.build_list(_as_list(v("catchClause"))),
                                    loc)
            case "CatchClause":
                return CatchClause(_name(v("identifier")), self.parameters(v("parameterList")),
                                   self.build(v("block")), loc)
            case "InLineAssemblyStatement" | "InlineAssemblyStatement":
                return InlineAssemblyStatement(v("language"), loc)

            # ── expressions
            case "Identifier":
                return Identifier(v("name"), loc)
            case "NumberLiteral":
                return NumberLiteral(v("number"), v("subdenomination"), loc)
            case "stringLiteral" | "StringLiteral":
                return StringLiteral(v("value"), loc=loc)
            case "hexLiteral" | "HexLiteral":
                return HexLiteral(v("value"), loc)
            case "BooleanLiteral":
                return BooleanLiteral(v("value"), loc)
            case "MemberAccess":
                return MemberAccess(expr(v("expression")), v("memberName"), loc)
            case "IndexAccess":
                return IndexAccess(expr(v("base")), expr(v("index")), loc)
            case "IndexRangeAccess":
                return IndexRangeAccess(expr(v("base")), expr(v("indexStart")), expr(v("indexEnd")), loc)
            case "FunctionCall":
                return FunctionCall(expr(v("expression")), [expr(a) for a in v("arguments") or []],
                                    list(v("names") or []), loc)
            case "FunctionCallOptions":
                return FunctionCallOptions(expr(v("expression")), list(v("names") or []),
                                           [expr(a) for a in v("arguments") or []], loc)
            case "BinaryOperation":
                return BinaryOperation(v("operator"), expr(v("left")), expr(v("right")), loc)
            case "UnaryOperation":
                return UnaryOperation(v("operator"), expr(v("subExpression")), bool(v("isPrefix")), loc)
            case "Conditional":
                return Conditional(expr(v("condition")), expr(v("TrueExpression")),
                                   expr(v("FalseExpression")), loc)
            case "TupleExpression":
                return TupleExpression([expr(c) for c in v("components") or []],
                                       bool(v("isArray")), loc)
            case "NewExpression":
                return NewExpression(self.build(v("typeName")), loc)
            case "ElementaryTypeNameExpression":
                return ElementaryTypeNameExpression(self.build(v("typeName")), loc)

            case kind:
                return GenericNode(kind or "Unknown", self.nested(value), loc)

    def expr(self, value) -> SyntaxNode | None:
        # `payable` and `type` reach expression slots as bare keyword text
        if isinstance(value, str):
            return Identifier(value)
        return self.build(value)

    def build_list(self, values) -> list[SyntaxNode]:
        """Node entries of a list; separators and other leftovers are dropped."""
        return [self.build(item) for item in _as_list(values) if isinstance(item, dict)]

    def parameters(self, value) -> list[VariableDeclaration]:
        if isinstance(value, dict):
            value = value.get("parameters")
        return self.build_list(value)

    def nested(self, value: dict) -> list[SyntaxNode]:
        nodes = []
        for key, item in value.items():
            if key in Node.NONCHILD_KEYS:
                continue
            nodes.extend(self.build_list(item))
        return nodes

    def function_definition(self, value: dict, loc) -> FunctionDefinition:
        v = value.get
        is_constructor = bool(v("isConstructor"))
        is_fallback = bool(v("isFallback"))
        is_receive = bool(v("isReceive"))
        name = v("name")
        if is_constructor or is_fallback or is_receive:
            name = None
        elif not (isinstance(name, str) and name.isidentifier()):
            # legacy `function() { ... }`: solidity_parser names it after its own text
            name, is_fallback = None, True

        return FunctionDefinition(
            name,
            self.parameters(v("parameters")),
            self.parameters(v("returnParameters")),
            self.build(v("body")),
            visibility=_visibility(v("visibility")),
            modifiers=self.build_list(v("modifiers")),
            state_mutability=v("stateMutability"),
            is_constructor=is_constructor,
            is_fallback=is_fallback,
            is_receive=is_receive,
            loc=loc,
        )
