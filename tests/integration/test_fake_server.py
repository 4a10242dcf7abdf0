import json
import socket

import pytest

from live_search_llm.chat import LiveSearchChat
from live_search_llm.client.ollama import OllamaClient, parse_model_names
from live_search_llm.commands import CommandDispatcher
from live_search_llm.result import Err, Ok

pytestmark = pytest.mark.integration


async def test_check_running(ollama: OllamaClient) -> None:
    assert await ollama.check_running() == Ok(True)


async def test_check_running_nothing_listening() -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    result = await OllamaClient(host=f"http://127.0.0.1:{port}").check_running()
    assert result == Err("Not running")


async def test_list_models(ollama: OllamaClient) -> None:
    result = await ollama.list_models()
    assert "llama3:latest" in parse_model_names(result.unwrap())


async def test_generate(ollama: OllamaClient) -> None:
    assert await ollama.generate_response("llama3", "hello") == Ok("you said: hello")


async def test_generate_raw_passthrough(ollama: OllamaClient) -> None:
    assert await ollama.generate_response("raw", "hello") == Ok("not json at all")


async def test_pull_and_create(ollama: OllamaClient) -> None:
    assert (await ollama.pull_model("gemma3:1b")).is_ok
    assert (await ollama.create_modelfile("mario", "FROM gemma3:1b\nSYSTEM You are Mario.")).is_ok
    names = parse_model_names((await ollama.list_models()).unwrap())
    assert {"gemma3:1b", "mario"} <= set(names)


async def test_pull_error_has_status(ollama: OllamaClient) -> None:
    assert await ollama.pull_model("missing-model") == Err("Error: 500 Internal Server Error")


async def test_create_error_has_status(ollama: OllamaClient) -> None:
    assert await ollama.create_modelfile("broken", "SYSTEM no base") == Err("Error: 400 Bad Request")


async def test_search(search) -> None:
    result = await search.search_web("c++ tutorial")
    assert json.loads(result.unwrap())["Heading"] == "c++ tutorial"
    summary = await search.search_encyclopedia("Alan Turing")
    assert json.loads(summary.unwrap())["title"] == "Alan Turing"
    assert await search.search_encyclopedia("Nothing") == Err("Wikipedia search failed")


async def test_dispatcher_end_to_end(ollama: OllamaClient, search) -> None:
    dispatcher = CommandDispatcher(ollama=ollama, search=search)
    assert await dispatcher.invoke("check_ollama_running") == Ok(True)
    result = await dispatcher.invoke("generate_ollama_response", model="llama3", prompt="hi")
    assert result == Ok("you said: hi")


async def test_chat_turn(ollama: OllamaClient, search) -> None:
    chat = LiveSearchChat(ollama=ollama, search=search)
    assert (await chat.ensure_model()).is_ok
    result = await chat.ask("what is asyncio")
    assert result.unwrap().startswith("you said: Based on this context:\nDuckDuckGo: About ")
