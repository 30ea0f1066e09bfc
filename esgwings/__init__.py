"""
ESG Wings - Sustainability Strategy Card Game Engine

A deterministic, rules-driven engine for a turn-based card game in which
2-4 airlines balance five sustainability metrics over a fixed number of rounds.
The engine provides:
- Immutable state management
- Phase transitions (Event -> Action -> Resolution)
- Effect resolution against a read-only card catalog
- Scoring and win determination
- An autoplay policy for unattended demo games
"""

__version__ = "0.1.0"
