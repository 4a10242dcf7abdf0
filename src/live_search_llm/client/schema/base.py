from datetime import datetime

from pydantic.dataclasses import dataclass


@dataclass
class ModelDetails:
    format: str | None = None
    family: str | None = None
    families: list[str] | None = None
    parameter_size: str | None = None
    quantization_level: str | None = None


@dataclass
class TagModel:
    name: str
    modified_at: str | datetime | None = None
    size: int | None = None
    digest: str | None = None
    details: ModelDetails | None = None
