from live_search_llm.client.ollama import OllamaClient
from live_search_llm.client.search import SearchClient

__all__ = ["OllamaClient", "SearchClient"]
