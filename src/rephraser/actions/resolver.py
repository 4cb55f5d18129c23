"""Action registry.

Actions are named prompt templates declared in the config file. The resolver
keeps them in declaration order and turns ``(action, text)`` into a prompt.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from ..errors import ActionNotFoundError
from .template import TemplateEngine

if TYPE_CHECKING:
    from ..utils.config import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Action:
    """A user-invokable text transformation."""

    name: str  # Key used on the command line (e.g. "polite")
    display_name: str  # Label shown in listings
    prompt_template: str  # Template with a {text} placeholder


class ActionResolver:
    """Resolves action names to rendered prompts."""

    def __init__(self, actions: Iterable[Action]):
        self._actions: tuple[Action, ...] = tuple(actions)

        duplicates = [name for name, count in Counter(a.name for a in self._actions).items() if count > 1]
        if duplicates:
            logger.warning(
                f"Duplicate action names in configuration: {', '.join(duplicates)}. "
                "Only the first definition of each will be used."
            )
        logger.debug(f"ActionResolver initialized with {len(self._actions)} actions")

    @classmethod
    def from_config(cls, config: "Config") -> "ActionResolver":
        return cls(
            Action(name=a.name, display_name=a.display_name, prompt_template=a.prompt_template)
            for a in config.actions
        )

    def list_actions(self) -> tuple[Action, ...]:
        """Return all actions in the order they were declared."""
        return self._actions

    def find_action(self, name: str) -> Action | None:
        """Return the first action named exactly ``name``, or None."""
        return next((a for a in self._actions if a.name == name), None)

    def resolve(self, action_name: str, text: str) -> str:
        """Render the prompt for ``action_name`` with ``text`` bound.

        Raises:
            ActionNotFoundError: If no action has that name.
            InvalidTemplateError: If the action's template has unbound placeholders.
        """
        action = self.find_action(action_name)
        if action is None:
            raise ActionNotFoundError(action_name)

        engine = TemplateEngine()
        engine.set("text", text)
        return engine.render(action.prompt_template)
