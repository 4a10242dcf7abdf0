from typing import Literal

from pydantic.dataclasses import dataclass

# https://github.com/ollama/ollama/blob/main/docs/api.md#generate-a-completion


@dataclass
class GenerateRequest:
    model: str
    prompt: str
    # responses are always buffered in full
    stream: Literal[False] = False


@dataclass
class GenerateResponse:
    # metadata (model, done, durations, ...) is ignored so its types never reject a reply
    response: str
