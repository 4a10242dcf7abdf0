from pydantic.dataclasses import dataclass

# https://github.com/ollama/ollama/blob/main/docs/api.md#create-a-model


@dataclass
class CreateRequest:
    name: str
    modelfile: str
