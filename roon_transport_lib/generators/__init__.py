"""Request generators for the transport service."""

from .registry import COMMANDS, CommandSpec

__all__ = ["COMMANDS", "CommandSpec"]
