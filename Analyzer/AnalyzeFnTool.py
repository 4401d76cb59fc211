# SolCallFlow/Analyzer/AnalyzeFnTool.py
"""
The "analyze-fn" operation: one Solidity source (inline or by path) and a
function name in, the JSON call flow of that function out.
"""
from __future__ import annotations


from pydantic import BaseModel, ConfigDict, Field, model_validator

from Analyzer.ContractAnalyzer import ContractAnalyzer

TOOL_NAME = "analyze-fn"
TOOL_DESCRIPTION = (
    "Analyzes a Solidity function and returns its call flow: the internal "
    "functions it reaches (expanded recursively), the external calls it makes "
    "on contract instances, the library calls, the modifiers applied to it and "
    "its source text. `contractContent` should be the whole contract source "
    "code (or `contractPath` a path to it), `fnToAnalyze` the exact function name."
)


class AnalyzeFnRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    contract_content: str | None = Field(None, alias="contractContent", min_length=1)
    contract_path: str | None = Field(None, alias="contractPath", min_length=1)
    fn_to_analyze: str = Field(alias="fnToAnalyze", min_length=1)

    @model_validator(mode="after")
    def _one_source(self):
        if (self.contract_content is None) == (self.contract_path is None):
            raise ValueError("exactly one of contractContent / contractPath is required")
        return self


class AnalyzeFnResponse(BaseModel):
    fnCallFlow: str


def analyze_fn(args: dict | AnalyzeFnRequest,
               analyzer: ContractAnalyzer | None = None) -> dict:
    """
    Runs the analysis and returns {"fnCallFlow": <JSON text>}.
    Raises ValueError (pydantic ValidationError included) for bad input,
    SolidityParseError for unparseable source and OSError for unreadable paths.
    """
    req = args if isinstance(args, AnalyzeFnRequest) else AnalyzeFnRequest.model_validate(args)
    analyzer = analyzer or ContractAnalyzer()

    print(f"[analyze] function: {req.fn_to_analyze}")
    if req.contract_content is not None:
        print(f"[analyze] contract content length: {len(req.contract_content)}")
        result = analyzer.analyze(req.contract_content, req.fn_to_analyze)
    else:
        print(f"[analyze] contract path: {req.contract_path}")
        result = analyzer.analyze_file(req.contract_path, req.fn_to_analyze)

    return {"fnCallFlow": result.to_json()}


def tool_response(output: dict) -> dict:
    """Wraps an analyze_fn() output as structured + text tool content."""
    return {
        "structuredContent": output,
        "content": [{"type": "text", "text": output["fnCallFlow"]}],
    }


def tool_listing() -> dict:
    return {
        "name": TOOL_NAME,
        "description": TOOL_DESCRIPTION,
        "inputSchema": AnalyzeFnRequest.model_json_schema(by_alias=True),
        "outputSchema": AnalyzeFnResponse.model_json_schema(),
    }
