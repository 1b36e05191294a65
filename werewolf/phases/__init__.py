"""
Phase handlers for night turns and day voting.
"""

from .night_phase import NightPhaseHandler
from .voting import VotingHandler

__all__ = ['NightPhaseHandler', 'VotingHandler']
