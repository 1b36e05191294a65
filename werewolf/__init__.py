"""
Werewolf village: round logic for a hidden-role social-deduction game.
"""

__version__ = "0.1.0"
