# SolCallFlow/Domain/CallFlow.py
"""
Analysis results: function / modifier summaries and the call edges between them.
`to_dict()` produces the JSON-ready record served by the analyze-fn tool.
"""
from __future__ import annotations

import json


class ModifierDef:
    def __init__(self, name: str, parameters: list[str], source: str | None = None):
        self.name = name
        self.parameters = parameters
        self.source = source

    def to_dict(self) -> dict:
        d = {"name": self.name, "parameters": list(self.parameters)}
        if self.source is not None:
            d["source"] = self.source
        return d


class AppliedModifier:
    """A modifier invocation on a function header, arguments already rendered."""

    def __init__(self, name: str, arguments: list[str]):
        self.name = name
        self.arguments = arguments

    def to_dict(self) -> dict:
        return {"name": self.name, "parameters": list(self.arguments)}


# ───────── call edges ─────────
class CallEdge:
    type = "edge"

    def __init__(self, arguments: list[str]):
        self.arguments = arguments

    @property
    def nested_calls(self) -> list["CallEdge"]:
        return []

    def to_dict(self) -> dict:
        return edges_to_dicts([self])[0]

    def record(self) -> dict:
        """This edge's own fields; an internal call's "calls" starts empty."""
        raise NotImplementedError


class InternalCall(CallEdge):
    type = "internal"

    def __init__(self, target: str, arguments: list[str],
                 source: str | None = None, calls: list[CallEdge] | None = None):
        super().__init__(arguments)
        self.target = target
        self.source = source
        self.calls = calls if calls is not None else []

    @property
    def nested_calls(self):
        return self.calls

    def record(self) -> dict:
        d = {"type": self.type, "target": self.target, "arguments": list(self.arguments)}
        if self.source is not None:
            d["source"] = self.source
        d["calls"] = []
        return d

    def __repr__(self):
        return f"InternalCall({self.target}, {self.arguments}, calls={len(self.calls)})"


class ExternalCall(CallEdge):
    type = "external"

    def __init__(self, instance: str, contract_type: str, method: str, arguments: list[str]):
        super().__init__(arguments)
        self.instance = instance
        self.contract_type = contract_type
        self.method = method

    def record(self) -> dict:
        return {"type": self.type, "instance": self.instance,
                "contractType": self.contract_type, "method": self.method,
                "arguments": list(self.arguments)}

    def __repr__(self):
        return f"ExternalCall({self.instance}:{self.contract_type}.{self.method})"


class LibraryCall(CallEdge):
    type = "library"

    def __init__(self, library: str, method: str, arguments: list[str]):
        super().__init__(arguments)
        self.library = library
        self.method = method

    def record(self) -> dict:
        return {"type": self.type, "library": self.library, "method": self.method,
                "arguments": list(self.arguments)}

    def __repr__(self):
        return f"LibraryCall({self.library}.{self.method})"


def edges_to_dicts(edges: list[CallEdge]) -> list[dict]:
    """
    Edge trees → JSON-ready dicts, level by level with an explicit work list.
    Call chains nest as deep as the contract's call graph, so no recursion here.
    """
    records: list[dict] = []
    pending = [(edges, records)]
    while pending:
        level, into = pending.pop()
        for e in level:
            d = e.record()
            into.append(d)
            if e.nested_calls:
                pending.append((e.nested_calls, d["calls"]))
    return records


class VariableBinding:
    """Local variable initialised from a factory call, e.g. `ITroveManager tm = getTroveManager(i)`."""

    def __init__(self, variable: str, instance: str, contract_type: str):
        self.variable = variable
        self.instance = instance
        self.contract_type = contract_type


class FunctionDef:
    def __init__(self, name: str, parameters: list[str],
                 modifiers: list[AppliedModifier] | None = None,
                 source: str | None = None):
        self.name = name
        self.parameters = parameters
        self.modifiers = modifiers or []
        self.source = source
        self.calls: list[CallEdge] = []

    def to_dict(self) -> dict:
        d = {"name": self.name,
             "parameters": list(self.parameters),
             "modifiers": [m.to_dict() for m in self.modifiers]}
        if self.source is not None:
            d["source"] = self.source
        d["calls"] = edges_to_dicts(self.calls)
        return d


class AnalysisResult:
    def __init__(self, imports: list[str], contract_instances: dict[str, str],
                 modifiers: dict[str, ModifierDef], functions: dict[str, FunctionDef],
                 contract_name: str | None = None):
        self.imports = imports
        self.contract_instances = contract_instances
        self.modifiers = modifiers
        self.functions = functions
        self.contract_name = contract_name

    def to_dict(self) -> dict:
        return {
            "imports": list(self.imports),
            "contractInstances": dict(self.contract_instances),
            "modifiers": {k: m.to_dict() for k, m in self.modifiers.items()},
            "functions": {k: f.to_dict() for k, f in self.functions.items()},
        }

    def to_json(self, indent: int | None = None) -> str:
        """
        JSON text of `to_dict()`.  The json encoder recurses once per nesting
        level; a call chain deeper than it can follow is reported as ValueError.
        """
        try:
            return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
        except RecursionError as e:
            raise ValueError("call flow nested too deeply to serialize") from e
