"""Build and read Modelfile text for ``/api/create``.

Syntax follows https://github.com/ollama/ollama/blob/main/docs/modelfile.md.
"""

import re
from typing import Any

VALID_PARAMETERS = {
    "mirostat": int,
    "mirostat_eta": float,
    "mirostat_tau": float,
    "num_ctx": int,
    "repeat_last_n": int,
    "repeat_penalty": float,
    "temperature": float,
    "seed": int,
    "stop": str,
    "num_predict": int,
    "top_k": int,
    "top_p": float,
    "min_p": float,
}

_BLOCK_START = re.compile(r'^(SYSTEM|TEMPLATE|LICENSE)\s+"""(.*)$', re.IGNORECASE | re.DOTALL)
_MESSAGE = re.compile(r"^MESSAGE\s+(\w+)\s+(.*)$", re.IGNORECASE | re.DOTALL)


def _quote(text: str) -> str:
    return f'"""{text}"""' if "\n" in text or '"' in text else text


def _coerce(key: str, value: str) -> Any:
    kind = VALID_PARAMETERS.get(key)
    if kind is None or kind is str:
        return value.strip('"')
    try:
        return kind(value)
    except ValueError:
        return value


class ModelFile:
    def __init__(self) -> None:
        self.base: str | None = None
        self.parameters: dict[str, Any] = {}
        self.system: str | None = None
        self.template: str | None = None
        self.adapter: str | None = None
        self.license: str | None = None
        self.messages: list[dict[str, str]] = []

    def set_base(self, base: str) -> "ModelFile":
        self.base = base
        return self

    def set_parameter(self, key: str, value: Any) -> "ModelFile":
        # stop may repeat, every other parameter is last-wins
        if key == "stop":
            self.parameters.setdefault("stop", []).append(value)
        else:
            self.parameters[key] = value
        return self

    def set_system(self, system: str) -> "ModelFile":
        self.system = system
        return self

    def set_template(self, template: str) -> "ModelFile":
        self.template = template
        return self

    def set_adapter(self, adapter: str) -> "ModelFile":
        self.adapter = adapter
        return self

    def set_license(self, license_text: str) -> "ModelFile":
        self.license = license_text
        return self

    def add_message(self, role: str, content: str) -> "ModelFile":
        self.messages.append({"role": role, "content": content})
        return self

    def render(self) -> str:
        lines: list[str] = []
        if self.base:
            lines.append(f"FROM {self.base}")
        for key, value in self.parameters.items():
            values = value if isinstance(value, list) else [value]
            lines.extend(f"PARAMETER {key} {v}" for v in values)
        for keyword, text in (("SYSTEM", self.system), ("TEMPLATE", self.template)):
            if text:
                lines.append(f'{keyword} """{text}"""')
        if self.adapter:
            lines.append(f"ADAPTER {self.adapter}")
        if self.license:
            lines.append(f'LICENSE """{self.license}"""')
        lines.extend(f"MESSAGE {m['role']} {_quote(m['content'])}" for m in self.messages)
        return "\n".join(lines)

    def validate(self) -> list[str]:
        """Raise when FROM is missing; return warnings for unknown parameters."""
        if not self.base:
            raise ValueError("FROM instruction is required")
        return [f"Unknown parameter: {key}" for key in self.parameters if key not in VALID_PARAMETERS]

    @classmethod
    def from_string(cls, text: str) -> "ModelFile":
        model = cls()
        # open triple-quoted block: attribute name, or "message:<role>"
        block: str | None = None
        buffer: list[str] = []

        for raw in text.splitlines():
            line = raw.strip()
            if block is not None:
                if line.endswith('"""'):
                    buffer.append(raw.rstrip()[:-3])
                    value = "\n".join(buffer).strip("\n")
                    if block.startswith("message:"):
                        model.add_message(block.split(":", 1)[1], value)
                    else:
                        setattr(model, block, value)
                    block, buffer = None, []
                else:
                    buffer.append(raw)
                continue
            if not line or line.startswith("#"):
                continue

            match = _BLOCK_START.match(line)
            if match:
                rest = match.group(2)
                if rest.endswith('"""') and len(rest) >= 3:
                    setattr(model, match.group(1).lower(), rest[:-3])
                else:
                    block, buffer = match.group(1).lower(), [rest]
                continue

            keyword, _, arg = line.partition(" ")
            keyword = keyword.upper()
            arg = arg.strip()
            if keyword == "FROM":
                model.set_base(arg)
            elif keyword == "PARAMETER":
                key, _, value = arg.partition(" ")
                model.set_parameter(key, _coerce(key, value.strip()))
            elif keyword in ("SYSTEM", "TEMPLATE", "LICENSE"):
                setattr(model, keyword.lower(), arg.strip('"'))
            elif keyword == "ADAPTER":
                model.set_adapter(arg)
            elif keyword == "MESSAGE":
                msg = _MESSAGE.match(line)
                if not msg:
                    continue
                role, content = msg.groups()
                if content.startswith('"""') and not (len(content) >= 6 and content.endswith('"""')):
                    block, buffer = f"message:{role}", [content[3:]]
                else:
                    model.add_message(role, content.strip('"'))
        return model
