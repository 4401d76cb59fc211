# SolCallFlow/Analyzer/ExpressionRenderer.py
from __future__ import annotations

from Domain.AST import *
from Parser.SolidityVisitor import SolidityVisitor


class ExpressionRenderer(SolidityVisitor):
    """
    Expression node → display string, used for call and modifier arguments.

    Total: any kind without a rule below renders as `<Kind>`, a missing operand
    as `<unknown>`.  Operands and nested arguments go through the same rules.
    """

    def render(self, node: SyntaxNode | None) -> str:
        if node is None:
            return "<unknown>"
        return self.visit(node)

    def render_arguments(self, arguments) -> list[str]:
        return [self.render(arg) for arg in arguments or []]

    # kinds without a rule
    def visitChildren(self, node: SyntaxNode):
        return f"<{node.kind}>"

    def visitIdentifier(self, node: Identifier):
        return node.name

    # unit suffixes (`1 ether`, `2 days`) are rendered too, not only the bare number
    def visitNumberLiteral(self, node: NumberLiteral):
        if node.subdenomination:
            return f"{node.number} {node.subdenomination}"
        return node.number

    def visitStringLiteral(self, node: StringLiteral):
        return f'"{node.value}"'

    def visitMemberAccess(self, node: MemberAccess):
        return f"{self.render(node.expression)}.{node.member_name}"

    def visitFunctionCall(self, node: FunctionCall):
        if isinstance(node.expression, Identifier):
            return f"{node.expression.name}({', '.join(self.render_arguments(node.arguments))})"
        return "<FunctionCall>"

    def visitBinaryOperation(self, node: BinaryOperation):
        return f"{self.render(node.left)} {node.operator} {self.render(node.right)}"

    # prefix symbols plus postfix `i++` and word operators such as `delete x`;
    # all keep their source form
    def visitUnaryOperation(self, node: UnaryOperation):
        operand = self.render(node.sub_expression)
        if not node.is_prefix:
            return f"{operand}{node.operator}"
        if node.operator.isalpha():          # delete
            return f"{node.operator} {operand}"
        return f"{node.operator}{operand}"
