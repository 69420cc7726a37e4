"""
Scripted confirmation prompt for development and testing.

Answers from a preset queue instead of asking a person.
"""

import asyncio
from typing import Iterable, List, Optional

from prompts.base import ConfirmationPrompt


class MockConfirmationPrompt(ConfirmationPrompt):
    """
    Mock prompt for development.

    Behaviour:
    1. Records every message it was asked to confirm
    2. Pops the next scripted answer, or returns the default once the script is exhausted
    3. If a gate event is given, waits for it first (simulates a user thinking)
    """

    def __init__(self, answers: Optional[Iterable[bool]] = None, default: bool = True,
                 gate: Optional[asyncio.Event] = None):
        self.answers: List[bool] = list(answers or [])
        self.default = default
        self.gate = gate
        self.messages: List[str] = []

    async def confirm(self, message: str) -> bool:
        self.messages.append(message)
        if self.gate is not None:
            await self.gate.wait()
        if self.answers:
            return self.answers.pop(0)
        return self.default
