"""
Confirmation prompt interface.

The lifecycle controller asks for a yes/no answer before deleting a
submission. How the question is asked (browser dialog, native alert,
terminal) is up to the implementation.
"""

from abc import ABC, abstractmethod


class ConfirmationPrompt(ABC):
    """Abstract base class for yes/no confirmation prompts."""

    @abstractmethod
    async def confirm(self, message: str) -> bool:
        """
        Ask the user to confirm an action.

        May wait on user input for as long as it takes; callers must not
        time this out.

        Args:
            message: Question shown to the user

        Returns:
            True if the user approved the action
        """
        pass
