from .handler import OutputHandler

__all__ = ["OutputHandler"]
