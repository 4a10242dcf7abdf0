from pydantic.dataclasses import dataclass

# https://github.com/ollama/ollama/blob/main/docs/api.md#pull-a-model


@dataclass
class PullRequest:
    name: str
