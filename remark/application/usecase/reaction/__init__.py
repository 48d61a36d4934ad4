"""Reaction use cases."""

from .toggle_reaction import (
    ToggleReactionRequest,
    ToggleReactionResponse,
    ToggleReactionUseCase,
)

__all__ = [
    "ToggleReactionRequest",
    "ToggleReactionResponse",
    "ToggleReactionUseCase",
]
