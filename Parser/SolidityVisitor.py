# SolCallFlow/Parser/SolidityVisitor.py
# Generic visitor over the Domain.AST node kinds built by Parser.AstBuilder.
from Domain.AST import *

# This class defines a complete generic visitor for a syntax tree built by Parser.AstBuilder.

class SolidityVisitor:

    def visit(self, node: SyntaxNode):
        if node is None:
            return None
        return node.accept(self)

    def visitChildren(self, node: SyntaxNode):
        result = None
        for child in node.children():
            result = child.accept(self)
        return result


    # Visit a SourceUnit node built by AstBuilder.
    def visitSourceUnit(self, node: SourceUnit):
        return self.visitChildren(node)


    # Visit a PragmaDirective node built by AstBuilder.
    def visitPragmaDirective(self, node: PragmaDirective):
        return self.visitChildren(node)


    # Visit a ImportDirective node built by AstBuilder.
    def visitImportDirective(self, node: ImportDirective):
        return self.visitChildren(node)


    # Visit a ContractDefinition node built by AstBuilder.
    def visitContractDefinition(self, node: ContractDefinition):
        return self.visitChildren(node)


    # Visit a InheritanceSpecifier node built by AstBuilder.
    def visitInheritanceSpecifier(self, node: InheritanceSpecifier):
        return self.visitChildren(node)


    # Visit a UsingForDeclaration node built by AstBuilder.
    def visitUsingForDeclaration(self, node: UsingForDeclaration):
        return self.visitChildren(node)


    # Visit a StructDefinition node built by AstBuilder.
    def visitStructDefinition(self, node: StructDefinition):
        return self.visitChildren(node)


    # Visit a EnumDefinition node built by AstBuilder.
    def visitEnumDefinition(self, node: EnumDefinition):
        return self.visitChildren(node)


    # Visit a EventDefinition node built by AstBuilder.
    def visitEventDefinition(self, node: EventDefinition):
        return self.visitChildren(node)


    # Visit a CustomErrorDefinition node built by AstBuilder.
    def visitCustomErrorDefinition(self, node: CustomErrorDefinition):
        return self.visitChildren(node)


    # Visit a TypeDefinition node built by AstBuilder.
    def visitTypeDefinition(self, node: TypeDefinition):
        return self.visitChildren(node)


    # Visit a StateVariableDeclaration node built by AstBuilder.
    def visitStateVariableDeclaration(self, node: StateVariableDeclaration):
        return self.visitChildren(node)


    # Visit a VariableDeclaration node built by AstBuilder.
    def visitVariableDeclaration(self, node: VariableDeclaration):
        return self.visitChildren(node)


    # Visit a ModifierDefinition node built by AstBuilder.
    def visitModifierDefinition(self, node: ModifierDefinition):
        return self.visitChildren(node)


    # Visit a ModifierInvocation node built by AstBuilder.
    def visitModifierInvocation(self, node: ModifierInvocation):
        return self.visitChildren(node)


    # Visit a FunctionDefinition node built by AstBuilder.
    def visitFunctionDefinition(self, node: FunctionDefinition):
        return self.visitChildren(node)


    # Visit a ElementaryTypeName node built by AstBuilder.
    def visitElementaryTypeName(self, node: ElementaryTypeName):
        return self.visitChildren(node)


    # Visit a UserDefinedTypeName node built by AstBuilder.
    def visitUserDefinedTypeName(self, node: UserDefinedTypeName):
        return self.visitChildren(node)


    # Visit a Mapping node built by AstBuilder.
    def visitMapping(self, node: Mapping):
        return self.visitChildren(node)


    # Visit a ArrayTypeName node built by AstBuilder.
    def visitArrayTypeName(self, node: ArrayTypeName):
        return self.visitChildren(node)


    # Visit a FunctionTypeName node built by AstBuilder.
    def visitFunctionTypeName(self, node: FunctionTypeName):
        return self.visitChildren(node)


    # Visit a Block node built by AstBuilder.
    def visitBlock(self, node: Block):
        return self.visitChildren(node)


    # Visit a ExpressionStatement node built by AstBuilder.
    def visitExpressionStatement(self, node: ExpressionStatement):
        return self.visitChildren(node)


    # Visit a VariableDeclarationStatement node built by AstBuilder.
    def visitVariableDeclarationStatement(self, node: VariableDeclarationStatement):
        return self.visitChildren(node)


    # Visit a IfStatement node built by AstBuilder.
    def visitIfStatement(self, node: IfStatement):
        return self.visitChildren(node)


    # Visit a ForStatement node built by AstBuilder.
    def visitForStatement(self, node: ForStatement):
        return self.visitChildren(node)


    # Visit a WhileStatement node built by AstBuilder.
    def visitWhileStatement(self, node: WhileStatement):
        return self.visitChildren(node)


    # Visit a DoWhileStatement node built by AstBuilder.
    def visitDoWhileStatement(self, node: DoWhileStatement):
        return self.visitChildren(node)


    # Visit a EmitStatement node built by AstBuilder.
    def visitEmitStatement(self, node: EmitStatement):
        return self.visitChildren(node)


    # Visit a RevertStatement node built by AstBuilder.
    def visitRevertStatement(self, node: RevertStatement):
        return self.visitChildren(node)


    # Visit a TryStatement node built by AstBuilder.
    def visitTryStatement(self, node: TryStatement):
        return self.visitChildren(node)


    # Visit a CatchClause node built by AstBuilder.
    def visitCatchClause(self, node: CatchClause):
        return self.visitChildren(node)


    # Visit a InlineAssemblyStatement node built by AstBuilder.
    def visitInlineAssemblyStatement(self, node: InlineAssemblyStatement):
        return self.visitChildren(node)


    # Visit a ThrowStatement node built by AstBuilder.
    def visitThrowStatement(self, node: ThrowStatement):
        return self.visitChildren(node)


    # Visit a Identifier node built by AstBuilder.
    def visitIdentifier(self, node: Identifier):
        return self.visitChildren(node)


    # Visit a NumberLiteral node built by AstBuilder.
    def visitNumberLiteral(self, node: NumberLiteral):
        return self.visitChildren(node)


    # Visit a StringLiteral node built by AstBuilder.
    def visitStringLiteral(self, node: StringLiteral):
        return self.visitChildren(node)


    # Visit a HexLiteral node built by AstBuilder.
    def visitHexLiteral(self, node: HexLiteral):
        return self.visitChildren(node)


    # Visit a BooleanLiteral node built by AstBuilder.
    def visitBooleanLiteral(self, node: BooleanLiteral):
        return self.visitChildren(node)


    # Visit a MemberAccess node built by AstBuilder.
    def visitMemberAccess(self, node: MemberAccess):
        return self.visitChildren(node)


    # Visit a IndexAccess node built by AstBuilder.
    def visitIndexAccess(self, node: IndexAccess):
        return self.visitChildren(node)


    # Visit a IndexRangeAccess node built by AstBuilder.
    def visitIndexRangeAccess(self, node: IndexRangeAccess):
        return self.visitChildren(node)


    # Visit a FunctionCall node built by AstBuilder.
    def visitFunctionCall(self, node: FunctionCall):
        return self.visitChildren(node)


    # Visit a FunctionCallOptions node built by AstBuilder.
    def visitFunctionCallOptions(self, node: FunctionCallOptions):
        return self.visitChildren(node)


    # Visit a BinaryOperation node built by AstBuilder.
    def visitBinaryOperation(self, node: BinaryOperation):
        return self.visitChildren(node)


    # Visit a UnaryOperation node built by AstBuilder.
    def visitUnaryOperation(self, node: UnaryOperation):
        return self.visitChildren(node)


    # Visit a Conditional node built by AstBuilder.
    def visitConditional(self, node: Conditional):
        return self.visitChildren(node)


    # Visit a TupleExpression node built by AstBuilder.
    def visitTupleExpression(self, node: TupleExpression):
        return self.visitChildren(node)


    # Visit a NewExpression node built by AstBuilder.
    def visitNewExpression(self, node: NewExpression):
        return self.visitChildren(node)


    # Visit a ElementaryTypeNameExpression node built by AstBuilder.
    def visitElementaryTypeNameExpression(self, node: ElementaryTypeNameExpression):
        return self.visitChildren(node)

