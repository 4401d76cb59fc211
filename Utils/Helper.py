from pathlib import Path

from antlr4 import InputStream, CommonTokenStream
from solidity_parser.parser import Node
from solidity_parser.solidity_antlr4.SolidityLexer import SolidityLexer
from solidity_parser.solidity_antlr4.SolidityParser import SolidityParser

from Parser.AstBuilder import (AstBuilder, CallFlowAstVisitor, RaisingErrorListener,
                               SolidityParseError)
from Domain.AST import SyntaxNode, SourceUnit, ContractDefinition, ImportDirective


class ParserHelpers:

    # --------------------------- parsing
    @staticmethod
    def generate_parse_tree(src: str, rule: str = "sourceUnit", verbose=False) -> SyntaxNode:
        """
        Parses `src` from grammar rule `rule` ('sourceUnit' or 'expression').
        Raises SolidityParseError on the first lexer / parser error.
        """
        input_stream  = InputStream(src)
        lexer         = SolidityLexer(input_stream)
        token_stream  = CommonTokenStream(lexer)
        parser        = SolidityParser(token_stream)

        # ── error listeners: the first error aborts ─────────────
        listener = RaisingErrorListener()
        for recognizer in (lexer, parser):
            recognizer.removeErrorListeners()
            recognizer.addErrorListener(listener)

        Node.ENABLE_LOC = True
        try:
            match rule:
                case 'expression': tree = parser.expression()
                case _:            tree = parser.sourceUnit()

            if tree.stop is None:               # nothing but comments / whitespace
                return SourceUnit([])
            try:
                nodes = CallFlowAstVisitor().visit(tree)
            except (SolidityParseError, RecursionError):
                raise
            except Exception as e:              # solidity_parser raises bare Exception
                raise SolidityParseError(f"unsupported construct: {e}",
                                         tree.start.line, tree.start.column) from e
            return AstBuilder().build(nodes)

        except SolidityParseError as e:
            if verbose:
                print(f"[parse] {e}")
            raise
        except RecursionError as e:
            if verbose:
                print("[parse] nesting too deep")
            raise SolidityParseError("source nested too deeply to parse") from e

    # --------------------------- source-unit lookups
    @staticmethod
    def import_paths(unit: SourceUnit) -> list[str]:
        return [n.path for n in unit.children_nodes if isinstance(n, ImportDirective)]

    @staticmethod
    def first_contract(unit: SourceUnit) -> ContractDefinition | None:
        """First top-level contract / abstract contract / interface / library."""
        for node in unit.children_nodes:
            if isinstance(node, ContractDefinition):
                return node
        return None

    # --------------------------- I/O
    @staticmethod
    def read_source(path: str | Path) -> str:
        # OSError propagates to the caller
        return Path(path).read_text(encoding="utf-8")
