import argparse
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from markuptree.node import to_json_ready
from markuptree.parser import parse
from markuptree.tokenizer import MarkupSyntaxError


logger = logging.getLogger(__name__)

app = FastAPI(title="markuptree playground")

# Allow cross-origin requests so a local editor page can post markup freely.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_endpoint() -> JSONResponse:
    return JSONResponse({"status": "ok"})


@app.post("/parse")
async def parse_endpoint(request: Request) -> JSONResponse:
    body = await request.body()
    markup = body.decode("utf-8", errors="replace")
    try:
        nodes = parse(markup)
    except MarkupSyntaxError as e:
        logger.info("rejected markup: %s", e)
        return JSONResponse({"detail": str(e)}, status_code=422)
    return JSONResponse({"nodes": to_json_ready(nodes)})


if __name__ == "__main__":
    import uvicorn

    argparser = argparse.ArgumentParser(description="markuptree playground server")
    argparser.add_argument("--host", default="127.0.0.1")
    argparser.add_argument("--port", type=int, default=8000)
    argparser.add_argument("--log-level", default="INFO")
    args = argparser.parse_args()

    logging.basicConfig(level=args.log_level.upper())
    uvicorn.run(app, host=args.host, port=args.port)

# Usage:
# uv run server.py
