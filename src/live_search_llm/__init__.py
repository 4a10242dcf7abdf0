from live_search_llm.__about__ import __version__, __version_tuple__

__all__ = ["__version__", "__version_tuple__"]
