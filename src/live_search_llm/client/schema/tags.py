from pydantic.dataclasses import dataclass

from live_search_llm.client.schema.base import TagModel

# https://github.com/ollama/ollama/blob/main/docs/api.md#list-local-models


@dataclass
class TagsResponse:
    models: list[TagModel]

    @property
    def names(self) -> list[str]:
        return [m.name for m in self.models]
