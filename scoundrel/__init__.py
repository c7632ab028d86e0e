"""
Scoundrel - Single-player dungeon crawl played with a standard deck.

A deterministic rules engine (seedable shuffle) with:
- Room lifecycle and carry-over
- Potions, weapons and the weapon stack
- Centralized victory/defeat detection
- Bot policies and an in-memory session layer for front-ends
"""

__version__ = "0.1.0"
