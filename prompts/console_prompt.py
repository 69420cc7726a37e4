"""
Terminal confirmation prompt.

Reads a y/n answer from stdin without blocking the event loop.
"""

import asyncio
import logging

from prompts.base import ConfirmationPrompt

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}


class ConsolePrompt(ConfirmationPrompt):
    """Asks on the terminal and waits for the user's answer."""

    def __init__(self, default: bool = False):
        self.default = default

    async def confirm(self, message: str) -> bool:
        suffix = "[Y/n]" if self.default else "[y/N]"
        try:
            answer = await asyncio.to_thread(input, f"{message} {suffix} ")
        except EOFError:
            logger.info("No input available, using default answer")
            return self.default
        answer = (answer or "").strip().lower()
        if not answer:
            return self.default
        return answer in _YES
