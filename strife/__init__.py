"""
Strife - Board Game Rules Engine

A turn-based board game engine: players move along a branching tile
graph, draw color-coded cards and apply timed or immediate effects to
their gold, income and movement until someone collects enough victory
points. The engine provides:
- Board loading and traversal
- Card decks with reshuffle-on-exhaustion
- Immediate, choice, gamble and timed card effects
- The turn state machine
"""

__version__ = "0.1.0"
