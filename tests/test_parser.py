import unittest

from Domain.AST import *
from Parser.AstBuilder import SolidityParseError
from Utils.Helper import ParserHelpers


def parse(src):
    return ParserHelpers.generate_parse_tree(src)


def expr(text):
    return ParserHelpers.generate_parse_tree(text, "expression")


def body_of(src, name):
    contract = parse(src).children_nodes[0]
    for node in contract.sub_nodes:
        if isinstance(node, FunctionDefinition) and node.name == name:
            return node.body
    raise KeyError(name)


class TestSourceUnit(unittest.TestCase):
    def test_pragma_and_import_forms(self):
        unit = parse(
            'pragma solidity ^0.8.0;\n'
            'import "./A.sol";\n'
            'import * as C from "./C.sol";\n'
            'import {D, E as F} from "./D.sol";\n'
        )
        pragma, *imports = unit.children_nodes
        self.assertEqual((pragma.name, pragma.value), ("solidity", "^0.8.0"))
        self.assertEqual([i.path for i in imports], ["./A.sol", "./C.sol", "./D.sol"])
        self.assertEqual(imports[1].unit_alias, "C")
        self.assertEqual(imports[2].symbol_aliases, [("D", None), ("E", "F")])
        self.assertEqual(ParserHelpers.import_paths(unit), ["./A.sol", "./C.sol", "./D.sol"])

    def test_contract_kinds_and_inheritance(self):
        unit = parse(
            "abstract contract A is B {}\n"
            "interface I {}\n"
            "library L {}\n"
        )
        a, i, l = unit.children_nodes
        self.assertEqual(a.contract_kind, "abstract")
        self.assertEqual([b.base_name.name_path for b in a.base_contracts], ["B"])
        self.assertEqual((i.contract_kind, l.contract_kind), ("interface", "library"))
        self.assertIs(ParserHelpers.first_contract(unit), a)

    def test_empty_and_comment_only_sources(self):
        self.assertEqual(parse("").children_nodes, [])
        self.assertEqual(parse("// nothing here\n/* at all */\n").children_nodes, [])

    def test_contract_members(self):
        unit = parse("""
        contract T {
            using SafeMath for uint256;
            struct Pos { uint256 size; address owner; }
            enum Side { Long, Short }
            event Moved(address indexed who, uint256 amount);
            uint256 public constant MAX = 10 ** 18;
            IERC20 token;
            modifier onlyOwner { _; }
        }
        """)
        members = unit.children_nodes[0].sub_nodes
        self.assertEqual([n.kind for n in members], [
            "UsingForDeclaration", "StructDefinition", "EnumDefinition", "EventDefinition",
            "StateVariableDeclaration", "StateVariableDeclaration", "ModifierDefinition",
        ])
        self.assertEqual(members[0].library_name, "SafeMath")
        self.assertEqual(members[2].members, ["Long", "Short"])
        self.assertTrue(members[3].parameters[0].is_indexed)
        const = members[4].variables[0]
        self.assertTrue(const.is_declared_const)
        self.assertEqual(const.visibility, "public")
        token = members[5].variables[0]
        self.assertIsNone(token.visibility)
        self.assertEqual(token.type_name.name_path, "IERC20")
        self.assertEqual(members[6].parameters, [])

    def test_function_headers(self):
        unit = parse("""
        contract T {
            constructor(address a) Ownable(a) {}
            function f(uint256 x) external onlyOwner returns (uint256 y, bool) {}
            function g() public view;
            fallback() external payable {}
            receive() external payable {}
            function() external {}
        }
        """)
        ctor, f, g, fb, rc, legacy = unit.children_nodes[0].sub_nodes
        self.assertTrue(ctor.is_constructor)
        self.assertIsNone(ctor.name)
        self.assertEqual([m.name for m in ctor.modifiers], ["Ownable"])
        self.assertEqual(f.name, "f")
        self.assertEqual(f.visibility, "external")
        self.assertEqual([m.name for m in f.modifiers], ["onlyOwner"])
        self.assertEqual([(p.name, p.type_name.name) for p in f.parameters], [("x", "uint256")])
        self.assertEqual([p.name for p in f.return_parameters], ["y", None])
        self.assertIsNone(g.body)
        self.assertEqual(g.state_mutability, "view")
        self.assertTrue(fb.is_fallback)
        self.assertIsNone(fb.name)
        self.assertTrue(rc.is_receive)
        self.assertTrue(legacy.is_fallback)
        self.assertIsNone(legacy.name)

    def test_locations(self):
        src = "contract T {\n    function f() public {\n        g();\n    }\n}\n"
        fn = parse(src).children_nodes[0].sub_nodes[0]
        self.assertEqual((fn.loc.start_line, fn.loc.end_line), (2, 4))
        self.assertEqual(fn.loc.start_column, 4)


class TestStatements(unittest.TestCase):
    def test_statement_kinds(self):
        body = body_of("""
        contract T {
            function f(address to) public {
                uint256 a = 1;
                ITroveManager m = getTroveManager(a);
                token.transfer{value: 1}(to);
                for (uint256 i = 0; i < a; i++) { a += i; }
                unchecked { a--; }
                if (a == 0) revert Empty(a);
                emit Done(a);
                return;
            }
        }
        """, "f")
        self.assertEqual([s.kind for s in body.statements], [
            "VariableDeclarationStatement", "VariableDeclarationStatement",
            "ExpressionStatement", "ForStatement", "Block", "IfStatement", "EmitStatement",
        ])
        binding = body.statements[1]
        self.assertEqual(binding.variables[0].name, "m")
        self.assertEqual(binding.variables[0].type_name.name_path, "ITroveManager")
        self.assertEqual(binding.initial_value.expression.name, "getTroveManager")
        call = body.statements[2].expression
        self.assertIsInstance(call.expression, FunctionCallOptions)
        self.assertEqual(call.expression.names, ["value"])
        self.assertEqual(call.expression.expression.member_name, "transfer")
        self.assertTrue(body.statements[4].unchecked)
        self.assertIsInstance(body.statements[5].true_body, RevertStatement)

    def test_syntax_error_reports_line(self):
        src = "contract C {\n  function f() public {\n    uint x = ;\n  }\n}\n"
        with self.assertRaises(SolidityParseError) as cm:
            parse(src)
        self.assertEqual(cm.exception.line, 3)
        self.assertIsInstance(cm.exception, ValueError)

    def test_unterminated_contract(self):
        with self.assertRaises(SolidityParseError):
            parse("contract C { function f() public {}")

    def test_grammar_newer_than_parser_is_a_parse_error(self):
        with self.assertRaises(SolidityParseError) as cm:
            parse("contract C layout at 0x1234 { uint x; }")
        self.assertEqual(cm.exception.line, 1)

    def test_deep_nesting_is_a_parse_error_not_a_crash(self):
        src = "contract C { uint x = " + "(" * 2000 + "1" + ")" * 2000 + "; }"
        with self.assertRaises(SolidityParseError):
            parse(src)


class TestExpressions(unittest.TestCase):
    def test_precedence(self):
        e = expr("a + b * c")
        self.assertEqual(e.operator, "+")
        self.assertEqual(e.right.operator, "*")

    def test_call_options_and_member_chain(self):
        e = expr("pool.positions[id].close{gas: 5000}(to)")
        self.assertIsInstance(e, FunctionCall)
        self.assertIsInstance(e.expression, FunctionCallOptions)
        self.assertEqual(e.expression.names, ["gas"])
        member = e.expression.expression
        self.assertEqual(member.member_name, "close")
        self.assertIsInstance(member.expression, IndexAccess)

    def test_named_arguments(self):
        e = expr("Pos({size: 1, owner: who})")
        self.assertEqual(e.names, ["size", "owner"])
        self.assertEqual(len(e.arguments), 2)

    def test_index_ranges(self):
        head = expr("data[4:]")
        self.assertIsInstance(head, IndexRangeAccess)
        self.assertEqual(head.index_start.number, "4")
        self.assertIsNone(head.index_end)
        whole = expr("data[:]")
        self.assertIsInstance(whole, IndexRangeAccess)
        self.assertIsNone(whole.index_start)

    def test_literals_and_unary(self):
        self.assertEqual(expr("1 ether").subdenomination, "ether")
        self.assertIs(expr("true").value, True)
        self.assertTrue(expr("[1, 2, 3]").is_array)
        self.assertFalse(expr("i++").is_prefix)
        self.assertTrue(expr("-x").is_prefix)


if __name__ == "__main__":
    unittest.main()
