import unittest

from Analyzer.SymbolCollector import SymbolCollector
from Utils.Helper import ParserHelpers
from Utils.SourceSlicer import SourceSlicer


def collect(src):
    contract = ParserHelpers.first_contract(ParserHelpers.generate_parse_tree(src))
    return SymbolCollector(SourceSlicer(src)).collect(contract)


class TestSymbolCollector(unittest.TestCase):
    def test_empty_tables_for_plain_contract(self):
        tables = collect("contract C { uint256 x; mapping(address => uint) m; function f() public {} }")
        self.assertEqual(tables.contract_instances, {})
        self.assertEqual(tables.modifiers, {})
        self.assertEqual(list(tables.functions), ["f"])

    def test_contract_instances(self):
        tables = collect("""
        contract C {
            IERC20 public token;
            Lib.Pool internal pool;
            IOracle oracle;
            IFeed oracle;
            uint256[] values;
        }
        """)
        self.assertEqual(tables.contract_instances,
                         {"token": "IERC20", "pool": "Lib.Pool", "oracle": "IFeed"})

    def test_modifiers(self):
        src = """contract C {
    modifier onlyRole(bytes32 role, address who) {
        require(hasRole(role, who));
        _;
    }
    modifier guarded { _; }
}"""
        tables = collect(src)
        role = tables.modifiers["onlyRole"]
        self.assertEqual(role.parameters, ["role", "who"])
        self.assertTrue(role.source.startswith("modifier onlyRole(bytes32 role, address who) {"))
        self.assertTrue(role.source.endswith("}"))
        self.assertEqual(tables.modifiers["guarded"].to_dict(),
                         {"name": "guarded", "parameters": [], "source": "modifier guarded { _; }"})

    def test_functions_and_applied_modifiers(self):
        tables = collect("""
        contract C {
            function f(uint256 a, address b) external onlyRole(ADMIN, msg.sender) guarded returns (bool) {
                return true;
            }
        }
        """)
        f = tables.functions["f"]
        self.assertEqual(f.parameters, ["a", "b"])
        self.assertEqual([m.to_dict() for m in f.modifiers], [
            {"name": "onlyRole", "parameters": ["ADMIN", "msg.sender"]},
            {"name": "guarded", "parameters": []},
        ])
        self.assertEqual(f.calls, [])
        self.assertEqual(tables.function_nodes["f"].name, "f")

    def test_sentinel_keys(self):
        tables = collect("""
        contract C {
            constructor() {}
            function() external payable {}
            receive() external payable {}
        }
        """)
        self.assertEqual(list(tables.functions), ["constructor", "<fallback>", "<receive>"])
        self.assertEqual(tables.functions["<fallback>"].source, "function() external payable {}")

    def test_later_function_overwrites_in_place(self):
        tables = collect("""
        contract C {
            function a(uint x) public {}
            function b() public {}
            function a(uint x, uint y) public {}
        }
        """)
        self.assertEqual(list(tables.functions), ["a", "b"])
        self.assertEqual(tables.functions["a"].parameters, ["x", "y"])

    def test_no_contract(self):
        tables = collect("pragma solidity ^0.8.0;")
        self.assertEqual((tables.contract_instances, tables.modifiers, tables.functions), ({}, {}, {}))


if __name__ == "__main__":
    unittest.main()
