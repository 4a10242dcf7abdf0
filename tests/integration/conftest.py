"""Integration test fixtures.

Starts a fake Ollama server (FastAPI + uvicorn) in-process on a free port
and provides clients pointing at it.
"""

from __future__ import annotations

from collections.abc import Generator
import socket
import threading
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import httpx
import pytest
import uvicorn

from live_search_llm.client.ollama import OllamaClient
from live_search_llm.client.search import SearchClient


def _free_port() -> int:
    """Find a free TCP port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def _wait_for_server(url: str, timeout: float = 30.0, interval: float = 0.2) -> None:
    """Block until *url* returns a 200 response or *timeout* is reached."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=3)
            if r.status_code == 200:
                return
        except (httpx.ConnectError, httpx.ReadError, httpx.TimeoutException):
            pass
        time.sleep(interval)
    raise TimeoutError(f"Server at {url} did not become ready within {timeout}s")


def fake_ollama() -> FastAPI:
    """Minimal stand-in for the Ollama and lookup endpoints the client uses."""
    app = FastAPI()
    models: list[dict] = [{"name": "llama3:latest", "model": "llama3:latest", "size": 1}]

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.get("/api/tags")
    async def tags() -> dict:
        return {"models": models}

    @app.post("/api/pull")
    async def pull(request: Request) -> JSONResponse:
        body = await request.json()
        if body["name"].startswith("missing"):
            return JSONResponse({"error": "pull model manifest: file does not exist"}, status_code=500)
        models.append({"name": body["name"]})
        return JSONResponse({"status": "success"})

    @app.post("/api/create")
    async def create(request: Request) -> JSONResponse:
        body = await request.json()
        if not body.get("modelfile", "").upper().startswith("FROM"):
            return JSONResponse({"error": "no FROM line"}, status_code=400)
        models.append({"name": body["name"]})
        return JSONResponse({"status": "success"})

    @app.post("/api/generate", response_model=None)
    async def generate(request: Request) -> JSONResponse | PlainTextResponse:
        body = await request.json()
        if body.get("stream") is not False:
            return JSONResponse({"error": "expected stream=false"}, status_code=400)
        if body["model"] == "raw":
            return PlainTextResponse("not json at all")
        return JSONResponse({"model": body["model"], "response": f"you said: {body['prompt']}", "done": True})

    @app.get("/ddg/")
    async def ddg(q: str, format: str) -> dict:
        return {"AbstractText": f"About {q}", "Heading": q}

    @app.get("/wiki/summary/{title}")
    async def wiki(title: str) -> JSONResponse:
        if title == "Nothing":
            return JSONResponse({"title": "Not found."}, status_code=404)
        return JSONResponse({"title": title, "extract": f"{title} is a topic."})

    return app


@pytest.fixture(scope="session")
def server_url() -> Generator[str, None, None]:
    """Start the fake server in-process and yield its base URL."""
    port = _free_port()
    url = f"http://127.0.0.1:{port}"

    server = uvicorn.Server(uvicorn.Config(fake_ollama(), host="127.0.0.1", port=port, log_level="warning"))
    t = threading.Thread(target=server.run, daemon=True)
    t.start()

    try:
        _wait_for_server(f"{url}/health")
        yield url
    finally:
        server.should_exit = True
        t.join(timeout=10)


@pytest.fixture
def ollama(server_url: str) -> OllamaClient:
    return OllamaClient(host=server_url)


@pytest.fixture
def search(server_url: str) -> SearchClient:
    return SearchClient(duckduckgo_url=f"{server_url}/ddg/", wikipedia_url=f"{server_url}/wiki/summary/")
