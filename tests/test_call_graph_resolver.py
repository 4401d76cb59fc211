import unittest

from Analyzer.CallGraphResolver import CallGraphResolver, TraversalGuard
from Analyzer.SymbolCollector import SymbolCollector
from Domain.AST import (Block, BooleanLiteral, ExpressionStatement, FunctionCall,
                        FunctionDefinition, Identifier, IfStatement)
from Domain.CallFlow import FunctionDef, InternalCall
from Utils.Helper import ParserHelpers
from Utils.SourceSlicer import SourceSlicer


def resolver_for(src, **kwargs):
    slicer = SourceSlicer(src)
    unit = ParserHelpers.generate_parse_tree(src)
    tables = SymbolCollector(slicer).collect(ParserHelpers.first_contract(unit))
    return CallGraphResolver(tables.functions, tables.function_nodes,
                             tables.contract_instances, slicer, **kwargs)


def flow(src, name, **kwargs):
    return [e.to_dict() for e in resolver_for(src, **kwargs).resolve(name)]


def chain_source(length):
    """Contract where f0 calls f1 calls f2 ... each call one block deep."""
    lines = ["contract Chain {"]
    for i in range(length):
        call = f"f{i + 1}();" if i + 1 < length else ""
        lines.append(f"    function f{i}() public {{ if (true) {{ {call} }} }}")
    lines.append("}")
    return "\n".join(lines)


def last_in_chain(edges):
    depth, last = 0, None
    while edges:
        depth += 1
        last = edges[0]
        edges = last.calls
    return depth, last


def shape(edges):
    """Internal-call tree as nested (target, [...]) tuples."""
    return [(e.target, shape(e.calls)) for e in edges if isinstance(e, InternalCall)]


class TestCycles(unittest.TestCase):
    def test_direct_self_call(self):
        src = """contract C {
    function countdown(uint256 n) public {
        if (n > 0) {
            countdown(n - 1);
        }
    }
}"""
        edges = resolver_for(src).resolve("countdown")
        self.assertEqual(len(edges), 1)
        self.assertEqual(edges[0].target, "countdown")
        self.assertEqual(edges[0].arguments, ["n - 1"])
        self.assertEqual(edges[0].calls, [])
        self.assertTrue(edges[0].source.startswith("function countdown(uint256 n) public {"))

    def test_mutual_recursion(self):
        src = """contract C {
    function a() public { b(); }
    function b() public { a(); }
}"""
        edges = resolver_for(src).resolve("a")
        self.assertEqual(shape(edges), [("b", [("a", [])])])
        self.assertEqual(shape(resolver_for(src).resolve("b")), [("a", [("b", [])])])

    def test_cycle_through_sibling_is_expanded_like_fresh_walk(self):
        src = """contract C {
    function x() public { y(); z(); }
    function y() public { x(); }
    function z() public { y(); }
}"""
        self.assertEqual(shape(resolver_for(src).resolve("x")),
                         [("y", [("x", [])]), ("z", [("y", [("x", [])])])])

    def test_cached_expansion_not_reused_inside_its_own_cycle(self):
        src = """contract C {
    function r() public { p(); q(); }
    function p() public { q(); }
    function q() public { p(); }
}"""
        self.assertEqual(shape(resolver_for(src).resolve("r")),
                         [("p", [("q", [("p", [])])]), ("q", [("p", [("q", [])])])])

    def test_acyclic_expansion_is_reused(self):
        src = """contract C {
    function top() public { left(); right(); }
    function left() public { leaf(1); }
    function right() public { leaf(2); }
    function leaf(uint256 v) public { Math.max(v, 1); }
}"""
        edges = resolver_for(src).resolve("top")
        self.assertEqual(shape(edges), [("left", [("leaf", [])]), ("right", [("leaf", [])])])
        first_leaf, second_leaf = edges[0].calls[0], edges[1].calls[0]
        self.assertEqual(first_leaf.arguments, ["1"])
        self.assertEqual(second_leaf.arguments, ["2"])
        self.assertIs(first_leaf.calls, second_leaf.calls)
        self.assertEqual(first_leaf.calls[0].to_dict(),
                         {"type": "library", "library": "Math", "method": "max",
                          "arguments": ["v", "1"]})


class TestTraversalGuard(unittest.TestCase):
    def test_cut_below_own_frame_blocks_caching(self):
        guard = TraversalGuard()
        guard.enter("a")
        guard.enter("b")
        guard.cut("a")
        guard.leave([])
        self.assertNotIn("b", guard.finished)
        guard.leave([])
        self.assertIn("a", guard.finished)
        self.assertEqual(guard.finished["a"][1], frozenset({"a", "b"}))

    def test_reuse_requires_disjoint_footprint(self):
        guard = TraversalGuard()
        guard.enter("a")
        guard.leave(["edge"])
        self.assertEqual(guard.reuse("a"), ["edge"])
        guard.enter("a")
        self.assertIsNone(guard.reuse("a"))
        self.assertIsNone(guard.reuse("missing"))


class TestClassification(unittest.TestCase):
    SRC = """contract Pool {
    IERC20 public token;
    ITroveManager tm;

    function internalOnly(uint256 v) internal returns (uint256) { return v; }

    function run(address to, uint256 amount) external {
        token.transfer(to, amount);
        SafeMath.add(amount, 1);
        Math.Fixed.mul(amount, 2);
        helper.doIt(amount);
        token.permit.selector;
        token.transfer{value: 1}(to);
        internalOnly(internalOnly(amount));
        IERC20(to).approve(to, amount);
        emit Paid(to, amount);
    }

    function liquidate(uint256 i) external {
        ITroveManager manager = getTroveManager(i);
        manager.liquidate(msg.sender);
    }

    function shadow(uint256 i) external {
        ITroveManager tm = getTroveManager(i);
        tm.batchLiquidate(i);
    }
}"""

    def test_call_site_kinds_in_source_order(self):
        self.assertEqual(flow(self.SRC, "run"), [
            {"type": "external", "instance": "token", "contractType": "IERC20",
             "method": "transfer", "arguments": ["to", "amount"]},
            {"type": "library", "library": "SafeMath", "method": "add",
             "arguments": ["amount", "1"]},
            {"type": "library", "library": "Math", "method": "Fixed.mul",
             "arguments": ["amount", "2"]},
            {"type": "external", "instance": "token", "contractType": "IERC20",
             "method": "transfer", "arguments": ["to"]},
            {"type": "internal", "target": "internalOnly", "arguments": ["internalOnly(amount)"],
             "source": "function internalOnly(uint256 v) internal returns (uint256) { return v; }",
             "calls": []},
            {"type": "internal", "target": "internalOnly", "arguments": ["amount"],
             "source": "function internalOnly(uint256 v) internal returns (uint256) { return v; }",
             "calls": []},
        ])

    def test_factory_binding(self):
        self.assertEqual(flow(self.SRC, "liquidate"), [
            {"type": "external", "instance": "getTroveManager()", "contractType": "ITroveManager",
             "method": "liquidate", "arguments": ["msg.sender"]},
        ])

    def test_instance_and_binding_both_fire(self):
        edges = flow(self.SRC, "shadow")
        self.assertEqual([(e["instance"], e["method"]) for e in edges],
                         [("tm", "batchLiquidate"), ("getTroveManager()", "batchLiquidate")])

    def test_custom_factory_table(self):
        src = """contract C {
    function f() external {
        IVault v = vaultAt(3);
        v.sweep();
    }
}"""
        self.assertEqual(flow(src, "f"), [])
        edges = flow(src, "f", factory_bindings={"vaultAt": ("vaultAt()", "IVault")})
        self.assertEqual(edges, [{"type": "external", "instance": "vaultAt()",
                                  "contractType": "IVault", "method": "sweep",
                                  "arguments": []}])

    def test_bodyless_and_unknown_functions(self):
        src = """abstract contract C {
    function hook() internal virtual;
    function f() external { hook(); unknown(); }
}"""
        self.assertEqual(flow(src, "f"), [
            {"type": "internal", "target": "hook", "arguments": [],
             "source": "function hook() internal virtual;", "calls": []},
        ])
        self.assertEqual(flow(src, "hook"), [])
        self.assertEqual(flow(src, "missing"), [])


class TestDeepStructures(unittest.TestCase):
    def test_long_call_chain(self):
        edges = resolver_for(chain_source(500)).resolve("f0")
        depth, last = last_in_chain(edges)
        self.assertEqual(depth, 499)
        self.assertEqual(last.target, "f499")
        self.assertEqual(last.calls, [])

    def test_long_chain_closing_into_a_cycle(self):
        src = chain_source(500).replace("{  }", "{ f0(); }")
        depth, last = last_in_chain(resolver_for(src).resolve("f0"))
        self.assertEqual(depth, 500)
        self.assertEqual(last.target, "f0")
        self.assertEqual(last.calls, [])

    def test_deeply_nested_body(self):
        body = Block([ExpressionStatement(FunctionCall(Identifier("leaf"), [Identifier("x")]))])
        for _ in range(5000):
            body = Block([IfStatement(BooleanLiteral(True), body)])
        resolver = CallGraphResolver(
            {"outer": FunctionDef("outer", []), "leaf": FunctionDef("leaf", [])},
            {"outer": FunctionDefinition("outer", [], [], body),
             "leaf": FunctionDefinition("leaf", [], [], Block([]))},
            {}, SourceSlicer(""))
        edges = resolver.resolve("outer")
        self.assertEqual([(e.target, e.arguments, e.calls) for e in edges], [("leaf", ["x"], [])])


if __name__ == "__main__":
    unittest.main()
