"""Prompt template engine.

Supports literal ``{name}`` substitution followed by a validation pass that
rejects any placeholder left unbound in the rendered text.
"""

import re

from ..errors import InvalidTemplateError

# A closing brace is required; a lone "{" is left alone.
_PLACEHOLDER_RE = re.compile(r"\{([^}]*)\}")


class TemplateEngine:
    """Simple substitution engine for prompt templates like ``"Fix: {text}"``."""

    def __init__(self):
        self.variables: dict[str, str] = {}

    def set(self, name: str, value: str) -> "TemplateEngine":
        """Bind ``name`` to ``value``, replacing any previous binding."""
        self.variables[name] = value
        return self

    def render(self, template: str) -> str:
        """Render ``template`` with the current bindings.

        Args:
            template: Template string with placeholders like ``{text}``.

        Returns:
            The substituted text.

        Raises:
            InvalidTemplateError: If placeholders remain unbound after substitution.
        """
        result = template
        for name, value in self.variables.items():
            result = result.replace(f"{{{name}}}", value)

        missing: list[str] = []
        for match in _PLACEHOLDER_RE.finditer(result):
            name = match.group(1)
            if name and name not in self.variables and name not in missing:
                missing.append(name)

        if missing:
            raise InvalidTemplateError(f"Missing variables: {', '.join(missing)}", missing)

        return result
