import argparse
import os
import pathlib
import sys

import uvicorn

from Analyzer.ContractAnalyzer import ContractAnalyzer
from Parser.AstBuilder import SolidityParseError
from Utils.CallGraph import build_call_graph

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Per-function call flow of a Solidity contract. "
                    "Without a source file the analyze-fn HTTP/WebSocket server is started."
    )
    p.add_argument("solidity_file", nargs="?")
    p.add_argument("-f", "--function", dest="functions", action="append", metavar="NAME",
                   help="only report this function (repeatable)")
    p.add_argument("--format", choices=("json", "edges"), default="json")
    p.add_argument("--indent", type=int, default=2)
    p.add_argument("-o", "--output")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="print the call-flow report while analysing")
    p.add_argument("--host", default=os.environ.get("HOST", DEFAULT_HOST))
    p.add_argument("--port", type=int, default=int(os.environ.get("PORT", DEFAULT_PORT)))
    return p


def render_edges(result) -> str:
    graph = build_call_graph(result)
    lines = []
    for caller, callee, data in graph.edges(data=True):
        lines.append(f"{caller} -> {callee} [{data['kind']}]")
    return "\n".join(lines)


def run_cli(args) -> int:
    analyzer = ContractAnalyzer(verbose=args.verbose)
    try:
        result = analyzer.analyze_file(args.solidity_file, args.functions)
    except OSError as e:
        print(f"[err] cannot read {args.solidity_file}: {e}", file=sys.stderr)
        return 1
    except SolidityParseError as e:
        print(f"[err] parsing error: {e}", file=sys.stderr)
        return 1

    try:
        if args.format == "edges":
            s = render_edges(result)
        else:
            s = result.to_json(args.indent)
    except ValueError as e:
        print(f"[err] {e}", file=sys.stderr)
        return 1

    if args.output:
        pathlib.Path(args.output).write_text(s, encoding="utf-8")
        print(f"[ok] written to {args.output}")
    else:
        print(s)
    return 0


def serve(host: str, port: int):
    print(f"[info] analyze-fn server on http://{host}:{port} (POST /tools/analyze-fn, /ws)")
    uvicorn.run("WebSocketServer:app", host=host, port=port)


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.solidity_file is None:
        serve(args.host, args.port)
        return 0
    return run_cli(args)


if __name__ == "__main__":
    sys.exit(main())
