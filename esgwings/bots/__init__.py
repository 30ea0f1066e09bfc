"""
Bots module - Automated players.

Provides:
- BotPolicy: Interface for bot decision-making
- FirstAffordablePolicy: The demo autoplay heuristic
- RandomPolicy: Seeded random baseline
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstAffordablePolicy

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstAffordablePolicy",
]
