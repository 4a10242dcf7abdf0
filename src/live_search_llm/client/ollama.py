from dataclasses import asdict

import httpx
from pydantic import TypeAdapter, ValidationError

from live_search_llm.client.base import HttpClient
from live_search_llm.client.schema.create import CreateRequest
from live_search_llm.client.schema.generate import GenerateRequest, GenerateResponse
from live_search_llm.client.schema.pull import PullRequest
from live_search_llm.client.schema.tags import TagsResponse
from live_search_llm.config import get_settings
from live_search_llm.errors import ProtocolError, TransportError
from live_search_llm.modelfile import ModelFile
from live_search_llm.result import Err, Ok, OperationResult

_generate_response = TypeAdapter(GenerateResponse)
_tags_response = TypeAdapter(TagsResponse)


def parse_generated_text(body: str) -> str:
    """Extract ``response`` from a generate reply, or hand back the body untouched."""
    try:
        return _generate_response.validate_json(body).response
    except ValidationError:
        return body


def parse_model_names(body: str) -> list[str]:
    return _tags_response.validate_json(body).names


class OllamaClient(HttpClient):
    """Client for the Ollama REST API, see https://github.com/ollama/ollama/blob/main/docs/api.md."""

    def __init__(
        self,
        host: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        super().__init__(timeout=timeout if timeout is not None else settings.timeout, transport=transport)
        self.host = (host or settings.ollama_host).rstrip("/")

    def _url(self, endpoint: str) -> str:
        return f"{self.host}{endpoint}"

    async def _post(self, endpoint: str, body: dict) -> OperationResult:
        try:
            return Ok(await self.request("POST", self._url(endpoint), body))
        except TransportError as e:
            return Err(str(e))
        except ProtocolError as e:
            return Err(f"Error: {e}")

    async def list_models(self) -> OperationResult:
        try:
            return Ok(await self.request("GET", self._url("/api/tags")))
        except TransportError as e:
            return Err(str(e))
        except ProtocolError:
            return Err("Failed to fetch models")

    async def pull_model(self, model: str) -> OperationResult:
        return await self._post("/api/pull", asdict(PullRequest(name=model)))

    async def generate_response(self, model: str, prompt: str) -> OperationResult:
        result = await self._post("/api/generate", asdict(GenerateRequest(model=model, prompt=prompt)))
        if isinstance(result, Err):
            return result
        return Ok(parse_generated_text(result.value))

    async def create_modelfile(self, name: str, modelfile: str) -> OperationResult:
        return await self._post("/api/create", asdict(CreateRequest(name=name, modelfile=modelfile)))

    async def create_model(self, name: str, modelfile: ModelFile) -> OperationResult:
        try:
            warnings = modelfile.validate()
        except ValueError as e:
            return Err(str(e))
        for warning in warnings:
            self.logger.warning(warning)
        return await self.create_modelfile(name, modelfile.render())

    async def check_running(self) -> OperationResult:
        # any HTTP answer means the server is up; only the status decides the flag
        try:
            await self.request("GET", self._url("/api/tags"))
        except TransportError:
            return Err("Not running")
        except ProtocolError:
            return Ok(False)
        return Ok(True)
