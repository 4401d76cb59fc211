# SolCallFlow/Utils/CallGraph.py
import networkx as nx

from Domain.CallFlow import AnalysisResult, CallEdge, InternalCall, ExternalCall, LibraryCall


def build_call_graph(result: AnalysisResult) -> nx.DiGraph:
    """
    Flattens the edge trees of `result.functions` into caller → callee edges.

    nodes : function name           (kind="function")
            instance.method         (kind="external", contract_type=...)
            Library.method          (kind="library")
    edges : kind = internal | external | library, count = occurrences across the flattened trees
    """
    graph = nx.DiGraph()
    for name, fdef in result.functions.items():
        graph.add_node(name, kind="function")
        _add_edges(graph, name, fdef.calls)
    return graph


def _callee(graph: nx.DiGraph, e: CallEdge) -> str | None:
    if isinstance(e, InternalCall):
        graph.add_node(e.target, kind="function")
        return e.target
    if isinstance(e, ExternalCall):
        callee = f"{e.instance}.{e.method}"
        graph.add_node(callee, kind="external", contract_type=e.contract_type)
        return callee
    if isinstance(e, LibraryCall):
        callee = f"{e.library}.{e.method}"
        graph.add_node(callee, kind="library")
        return callee
    return None


def _add_edges(graph: nx.DiGraph, caller: str, edges: list[CallEdge]):
    # (caller, edge list) work list; nested calls are attributed to their callee
    pending = [(caller, edges)]
    while pending:
        caller, level = pending.pop()
        for e in level:
            callee = _callee(graph, e)
            if callee is None:
                continue

            if graph.has_edge(caller, callee):
                graph[caller][callee]["count"] += 1
            else:
                graph.add_edge(caller, callee, kind=e.type, count=1)

            if e.nested_calls:
                pending.append((callee, e.nested_calls))


def reachable_functions(graph: nx.DiGraph, name: str) -> set[str]:
    """Function nodes reachable from `name` (itself excluded)."""
    if name not in graph:
        return set()
    reached = set()
    for succ in nx.descendants(graph, name):
        if graph.nodes[succ].get("kind") == "function":
            reached.add(succ)
    return reached
