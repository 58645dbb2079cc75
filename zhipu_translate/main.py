"""
Command-line entry point: translate a prompt and print the result as it grows.
"""

from __future__ import annotations

import asyncio
import sys

from .config import Configuration
from .llm.client import ZhipuAIClient
from .llm.exceptions import LLMError
from .llm.streaming.models import TaskStatus, TranslationSnapshot
from .logging_utils import configure_logging


class ProgressPrinter:
    """Refresh callback writing only the newly visible part of the result."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout
        self._printed = ""

    def __call__(self, snapshot: TranslationSnapshot) -> None:
        if snapshot.status is TaskStatus.FAIL:
            return
        if snapshot.result.startswith(self._printed):
            self.stream.write(snapshot.result[len(self._printed):])
        else:
            self.stream.write("\n" + snapshot.result)
        self.stream.flush()
        self._printed = snapshot.result


async def main(argv: list[str] | None = None) -> int:
    """Run one translation; the prompt comes from the arguments or stdin."""
    args = sys.argv[1:] if argv is None else argv
    prompt = " ".join(args) if args else sys.stdin.read()

    config = Configuration()
    configure_logging(config.get_logging_config().get("level", "INFO"))

    async with ZhipuAIClient(
        config.get_translation_config(),
        config.api_key,
        placeholder=config.get_status_message(TaskStatus.PENDING),
    ) as client:
        try:
            await client.translate(prompt, on_refresh=ProgressPrinter())
        except LLMError as e:
            print(f"\n{e}", file=sys.stderr)
            return 1

    print()
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
