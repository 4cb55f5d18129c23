from .resolver import Action, ActionResolver
from .template import TemplateEngine

__all__ = ["Action", "ActionResolver", "TemplateEngine"]
