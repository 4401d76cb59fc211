import json
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from typing import List

from Analyzer.AnalyzeFnTool import (AnalyzeFnRequest, analyze_fn, tool_listing,
                                    tool_response)
from Analyzer.ContractAnalyzer import ContractAnalyzer
from Parser.AstBuilder import SolidityParseError

app = FastAPI(title="solcallflow")


# keeps track of connected websocket clients
class ConnectionManager:
    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        print(f"[ws] client connected ({len(self.active_connections)} active)")

    def disconnect(self, websocket: WebSocket):
        self.active_connections.remove(websocket)
        print(f"[ws] client disconnected ({len(self.active_connections)} active)")

    async def send_personal_message(self, message: str, websocket: WebSocket):
        await websocket.send_text(message)


manager = ConnectionManager()


def run_analyze_fn(args) -> dict:
    # a fresh analyzer per request, nothing is shared between callers
    return analyze_fn(args, ContractAnalyzer())


@app.get("/tools")
async def list_tools():
    return {"tools": [tool_listing()]}


@app.post("/tools/analyze-fn")
async def analyze_fn_endpoint(req: AnalyzeFnRequest):
    try:
        output = run_analyze_fn(req)
    except (SolidityParseError, ValueError) as e:
        print(f"[err] {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except OSError as e:
        print(f"[err] {e}")
        return JSONResponse(status_code=404, content={"error": str(e)})
    return tool_response(output)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await manager.connect(websocket)
    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
                if not isinstance(message, dict):
                    raise ValueError("request must be a JSON object")
                reply = tool_response(run_analyze_fn(message))
            except (ValueError, OSError) as e:
                print(f"[err] {e}")
                reply = {"error": str(e)}

            await manager.send_personal_message(json.dumps(reply), websocket)
    except WebSocketDisconnect:
        print("[ws] client closed the connection")
    finally:
        # also reached when a handler error ends the loop
        manager.disconnect(websocket)
