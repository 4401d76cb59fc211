# SolCallFlow/Analyzer/ContractAnalyzer.py
from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from Domain.CallFlow import AnalysisResult, CallEdge
from Utils.Helper import ParserHelpers
from Utils.SourceSlicer import SourceSlicer
from Analyzer.ExpressionRenderer import ExpressionRenderer
from Analyzer.SymbolCollector import SymbolCollector
from Analyzer.CallGraphResolver import CallGraphResolver


class ContractAnalyzer:
    """
    Parses a source once, collects the symbol tables of its first contract and
    resolves the call edges of every function.  No state survives between
    `analyze()` calls, so one instance may serve many requests.
    """

    def __init__(self, factory_bindings: dict[str, tuple[str, str]] | None = None,
                 verbose=False):
        self.factory_bindings = factory_bindings
        self.verbose = verbose

    def analyze_file(self, path: str | Path,
                     filter_functions: str | Iterable[str] | None = None) -> AnalysisResult:
        return self.analyze(ParserHelpers.read_source(path), filter_functions)

    def analyze(self, source: str,
                filter_functions: str | Iterable[str] | None = None) -> AnalysisResult:
        unit = ParserHelpers.generate_parse_tree(source, verbose=self.verbose)
        imports = ParserHelpers.import_paths(unit)
        contract = ParserHelpers.first_contract(unit)

        slicer = SourceSlicer(source)
        renderer = ExpressionRenderer()
        tables = SymbolCollector(slicer, renderer).collect(contract)

        # every function is resolved; the filter only narrows what is returned
        resolver = CallGraphResolver(tables.functions, tables.function_nodes,
                                     tables.contract_instances, slicer, renderer,
                                     self.factory_bindings)
        for name, fdef in tables.functions.items():
            fdef.calls = resolver.resolve(name)

        result = AnalysisResult(imports, tables.contract_instances, tables.modifiers,
                                self._filtered(tables.functions, filter_functions),
                                contract_name=contract.name if contract else None)
        if self.verbose:
            self.print_report(result)
        return result

    @staticmethod
    def _filtered(functions: dict, filter_functions):
        if filter_functions is None:
            return functions
        if isinstance(filter_functions, str):
            filter_functions = {filter_functions}
        else:
            filter_functions = set(filter_functions)
        return {k: f for k, f in functions.items() if k in filter_functions}

    # ──────────────────────────────────────────────────────────────
    # console report
    # ----------------------------------------------------------------
    @staticmethod
    def print_report(result: AnalysisResult) -> None:
        if not result.functions:
            print("[info] no functions to report")
            return

        print(f"\n=======  CALL FLOW : {result.contract_name or '?'}  =======")
        for name, fdef in result.functions.items():
            mods = ", ".join(m.name for m in fdef.modifiers)
            print(f"{name}({', '.join(p or '' for p in fdef.parameters)})"
                  + (f" [{mods}]" if mods else ""))
            ContractAnalyzer._print_edges(fdef.calls, 1)
        print("=" * 40 + "\n")

    @staticmethod
    def _print_edges(edges: list[CallEdge], depth: int) -> None:
        levels = [iter(edges)]                  # one open iterator per nesting level
        while levels:
            e = next(levels[-1], None)
            if e is None:
                levels.pop()
                continue
            pad = "  " * (depth + len(levels) - 1)
            match e.type:
                case "internal":
                    print(f"{pad}→ {e.target}({', '.join(e.arguments)})")
                case "external":
                    print(f"{pad}⇢ {e.instance}:{e.contract_type}.{e.method}({', '.join(e.arguments)})")
                case "library":
                    print(f"{pad}⇢ {e.library}.{e.method}({', '.join(e.arguments)})")
            if e.nested_calls:
                levels.append(iter(e.nested_calls))
