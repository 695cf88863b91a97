"""Command line entry point for chatting about BCF topics."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from .aggregator import USAGE, TopicParser, load_directory
from .bcf import parse_bcf
from .clients import PROVIDERS, LLMClient
from .console import ConsoleIO
from .errors import ChatError, UsageError
from .manager import ChatSessionManager
from .schemas import KnowledgeContext

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class ChatRuntime:
    """Load the knowledge context for ``directory`` and wire up a session."""

    directory: str
    model: str = DEFAULT_MODEL
    provider: str = "openai"
    base_url: Optional[str] = None
    api_key_env: Optional[str] = None
    parse: TopicParser = parse_bcf
    console: Console = field(default_factory=Console)

    def __post_init__(self) -> None:
        self.context: KnowledgeContext = load_directory(self.directory, self.parse)
        self.llm_client = LLMClient(
            model=self.model,
            provider=self.provider,
            base_url=self.base_url,
            api_key_env=self.api_key_env,
        )
        self.io = ConsoleIO(self.console)
        self.manager = ChatSessionManager(
            context=self.context,
            llm_client=self.llm_client,
            io=self.io,
        )

    def run(self) -> None:
        self.console.print(
            Panel(
                f"Loaded {self.context.topic_count} topics from {len(self.context.sources)} files.\n"
                f"Model: {self.llm_client.provider}/{self.llm_client.model}",
                title="BCF AI Chat",
                border_style="blue",
            )
        )
        self.manager.run()
        self.console.print("Goodbye!")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bcfai-chat",
        description="Ask questions about the topics in a directory of BCF files",
    )
    parser.add_argument("directory", nargs="?", help="Directory containing .bcf files")
    parser.add_argument(
        "--provider",
        choices=list(PROVIDERS),
        default=os.environ.get("BCFAI_PROVIDER", "openai"),
        help="LLM provider type",
    )
    parser.add_argument(
        "--model",
        default=os.environ.get("BCFAI_MODEL", DEFAULT_MODEL),
        help="Model name exposed by the provider",
    )
    parser.add_argument(
        "--base-url",
        default=os.environ.get("BCFAI_BASE_URL"),
        help="Override the provider's API base URL",
    )
    parser.add_argument(
        "--api-key-env",
        default=os.environ.get("BCFAI_API_KEY_ENV"),
        help="Environment variable holding the API key",
    )
    parser.add_argument("--env-file", type=Path, help="Path to a .env file (default: ./.env)")
    parser.add_argument("--verbose", action="store_true", help="Trace prompt/response payloads.")
    return parser


def _env_file(argv: list[str]) -> Optional[Path]:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--env-file", type=Path)
    known, _ = pre.parse_known_args(argv)
    return known.env_file


def main(argv: Optional[Iterable[str]] = None, *, console: Optional[Console] = None) -> int:
    raw = list(argv) if argv is not None else sys.argv[1:]

    # .env has to be loaded before the parser reads its defaults
    env_file = _env_file(raw)
    load_dotenv(dotenv_path=env_file or Path.cwd() / ".env")

    args = _build_parser().parse_args(raw)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    console = console or Console()

    try:
        if not args.directory:
            raise UsageError(USAGE)
        # argparse does not check choices against defaults taken from the environment
        if args.provider.lower() not in PROVIDERS:
            raise UsageError(
                f"Unsupported provider '{args.provider}'; choose one of: {', '.join(PROVIDERS)}"
            )
        runtime = ChatRuntime(
            directory=args.directory,
            model=args.model,
            provider=args.provider,
            base_url=args.base_url,
            api_key_env=args.api_key_env,
            console=console,
        )
    except UsageError as exc:
        console.print(str(exc), style="bold red", markup=False)
        return 2
    except ChatError as exc:
        logger.error("Startup failed: %s", exc)
        console.print(str(exc), style="bold red", markup=False)
        return 1

    runtime.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
