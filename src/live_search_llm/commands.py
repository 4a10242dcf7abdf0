"""Name/argument command boundary used by the desktop front-end.

Every command returns an ``OperationResult``; ``invoke`` never raises for a
registered command.
"""

from collections.abc import Awaitable, Callable
import inspect
from typing import Any

from pydantic import TypeAdapter, ValidationError

from live_search_llm.client.ollama import OllamaClient
from live_search_llm.client.search import SearchClient
from live_search_llm.installer import install_model_server
from live_search_llm.result import Err, Ok, OperationResult
from live_search_llm.utils import logging

Command = Callable[..., Awaitable[OperationResult]]


def _check_arguments(command: Command, kwargs: dict[str, Any]) -> None:
    """Bind kwargs to the command signature and check each against its annotation."""
    signature = inspect.signature(command)
    bound = signature.bind(**kwargs)
    for name, value in bound.arguments.items():
        annotation = signature.parameters[name].annotation
        if annotation is not inspect.Parameter.empty:
            TypeAdapter(annotation).validate_python(value, strict=True)


class CommandDispatcher:
    def __init__(self, ollama: OllamaClient | None = None, search: SearchClient | None = None) -> None:
        self.ollama = ollama or OllamaClient()
        self.search = search or SearchClient()
        self.logger = logging.get_logger(__name__)
        self._commands: dict[str, Command] = {}

        self.add_command("greet", self.greet)
        self.add_command("list_ollama_models", self.ollama.list_models)
        self.add_command("pull_ollama_model", self.ollama.pull_model)
        self.add_command("generate_ollama_response", self.ollama.generate_response)
        self.add_command("create_ollama_modelfile", self.ollama.create_modelfile)
        self.add_command("search_duckduckgo", self.search.search_web)
        self.add_command("search_wikipedia", self.search.search_encyclopedia)
        self.add_command("check_ollama_running", self.ollama.check_running)
        self.add_command("install_ollama", install_model_server)

    def add_command(self, name: str, command: Command) -> None:
        self._commands[name] = command

    @property
    def commands(self) -> list[str]:
        return sorted(self._commands)

    @staticmethod
    async def greet(name: str) -> OperationResult:
        return Ok(f"Hello, {name}! You've been greeted from Python!")

    async def invoke(self, name: str, /, **kwargs: Any) -> OperationResult:
        command = self._commands.get(name)
        if command is None:
            return Err(f"Unknown command: {name}")
        try:
            _check_arguments(command, kwargs)
        except (TypeError, ValidationError) as e:
            return Err(f"Invalid arguments for {name}: {e}")
        self.logger.debug("invoke %s(%s)", name, ", ".join(kwargs))
        return await command(**kwargs)
