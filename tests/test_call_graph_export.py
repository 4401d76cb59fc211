import unittest
from pathlib import Path

from Analyzer.ContractAnalyzer import ContractAnalyzer
from Utils.CallGraph import build_call_graph, reachable_functions

VAULT = Path(__file__).parent / "fixtures" / "Vault.sol"


class TestCallGraphExport(unittest.TestCase):
    def setUp(self):
        self.graph = build_call_graph(ContractAnalyzer().analyze_file(VAULT))

    def test_node_kinds(self):
        nodes = self.graph.nodes
        self.assertEqual(nodes["deposit"]["kind"], "function")
        self.assertEqual(nodes["token.transferFrom"]["kind"], "external")
        self.assertEqual(nodes["token.transferFrom"]["contract_type"], "IERC20")
        self.assertEqual(nodes["SafeMath.add"]["kind"], "library")

    def test_edges(self):
        self.assertEqual(self.graph["deposit"]["_credit"]["kind"], "internal")
        self.assertEqual(self.graph["deposit"]["token.transferFrom"]["kind"], "external")
        self.assertEqual(self.graph["_credit"]["SafeMath.add"]["kind"], "library")
        self.assertFalse(self.graph.has_edge("deposit", "SafeMath.add"))

    def test_reachable_functions(self):
        self.assertEqual(reachable_functions(self.graph, "deposit"), {"_credit"})
        self.assertEqual(reachable_functions(self.graph, "price"), set())
        self.assertEqual(reachable_functions(self.graph, "unknown"), set())

    def test_one_edge_per_caller_callee_pair(self):
        result = ContractAnalyzer().analyze("""contract C {
    function a() public { b(); b(); Lib.f(); Lib.f(); }
    function b() public { a(); }
}""", "a")
        graph = build_call_graph(result)
        self.assertEqual(sorted(graph.edges()),
                         [("a", "Lib.f"), ("a", "b"), ("b", "a")])
        self.assertEqual(graph["a"]["Lib.f"]["count"], 2)
        self.assertEqual(graph["a"]["b"]["count"], 2)
        self.assertEqual(reachable_functions(graph, "a"), {"b"})

    def test_long_call_chain(self):
        src = "contract Chain {\n" + "\n".join(
            f"    function f{i}() public {{ f{i + 1}(); }}" for i in range(150)) + "\n}"
        graph = build_call_graph(ContractAnalyzer().analyze(src, "f0"))
        self.assertEqual(reachable_functions(graph, "f0"), {f"f{i}" for i in range(1, 150)})
        self.assertEqual(graph["f148"]["f149"]["count"], 1)


if __name__ == "__main__":
    unittest.main()
