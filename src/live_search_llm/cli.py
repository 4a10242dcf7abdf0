import argparse
import asyncio
import sys

from live_search_llm.__about__ import __version__
from live_search_llm.chat import LiveSearchChat
from live_search_llm.commands import CommandDispatcher
from live_search_llm.result import Err


def _parse_kwargs(pairs: list[str]) -> dict[str, str]:
    kwargs: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        kwargs[key] = value
    return kwargs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="live-search-llm", description="Live Search LLM backend")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("version", help="print the version")

    invoke = sub.add_parser("invoke", help="run a backend command by name")
    invoke.add_argument("name")
    invoke.add_argument("args", nargs="*", metavar="key=value")

    chat = sub.add_parser("chat", help="interactive chat with live search")
    chat.add_argument("--model", default=None)
    chat.add_argument("--no-search", action="store_true")
    return parser


async def _invoke(name: str, kwargs: dict[str, str]) -> int:
    result = await CommandDispatcher().invoke(name, **kwargs)
    if isinstance(result, Err):
        print(result.message, file=sys.stderr)
        return 1
    print(result.value)
    return 0


async def _chat(model: str | None, enable_search: bool) -> int:
    chat = LiveSearchChat(model=model, enable_search=enable_search)
    selected = await chat.ensure_model()
    if isinstance(selected, Err):
        print(selected.message, file=sys.stderr)
        return 1
    print(f"Chatting with {selected.value}, empty line to quit.")

    while True:
        try:
            message = input("> ").strip()
        except EOFError:
            break
        if not message:
            break
        result = await chat.ask(message)
        print(result.message if isinstance(result, Err) else result.value)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "invoke":
        try:
            kwargs = _parse_kwargs(args.args)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))
        return asyncio.run(_invoke(args.name, kwargs))
    if args.command == "chat":
        return asyncio.run(_chat(args.model, not args.no_search))

    print(f"live-search-llm v{__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
