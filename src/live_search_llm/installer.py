"""Automatic installation of the Ollama model server.

The platform is checked at runtime; only Windows has an installer strategy
(winget), every other platform reports that installation is unsupported.
"""

from abc import ABC, abstractmethod
import asyncio
import subprocess
import sys

from live_search_llm.result import Err, Ok, OperationResult
from live_search_llm.utils import logging

logger = logging.get_logger(__name__)

WINGET_INSTALL = [
    "winget",
    "install",
    "Ollama.Ollama",
    "--accept-source-agreements",
    "--silent",
    "--disable-interactivity",
]
OLLAMA_SERVE = ["ollama", "serve"]


class Installer(ABC):
    @abstractmethod
    async def install(self) -> OperationResult: ...


class WingetInstaller(Installer):
    async def install(self) -> OperationResult:
        logger.info("Running %s", " ".join(WINGET_INSTALL))
        try:
            # the exit status is not inspected, only whether winget could run
            await asyncio.to_thread(subprocess.run, WINGET_INSTALL, capture_output=True, check=False)
        except OSError as e:
            return Err(f"Failed to start installation: {e}")

        logger.info("Starting %s", " ".join(OLLAMA_SERVE))
        try:
            subprocess.Popen(OLLAMA_SERVE)
        except OSError as e:
            return Err(f"Failed to start Ollama: {e}")
        return Ok("Installation complete, Ollama started")


class UnsupportedInstaller(Installer):
    async def install(self) -> OperationResult:
        return Err("Automatic installation only supported on Windows")


def get_installer(platform: str | None = None) -> Installer:
    platform = platform or sys.platform
    if platform == "win32":
        return WingetInstaller()
    logger.debug("No installer for platform %s", platform)
    return UnsupportedInstaller()


async def install_model_server() -> OperationResult:
    return await get_installer().install()
