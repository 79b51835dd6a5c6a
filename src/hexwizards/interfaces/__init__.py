"""Protocol-based interfaces for the collaborators the engine talks to.

The turn controller only depends on these contracts, so renderers, dialogue
windows, alternative piece factories and AI strategies can be swapped in (or
mocked in tests) without touching the engine.
"""

from hexwizards.interfaces.ai import IAIPolicy
from hexwizards.interfaces.pieces import IPieceFactory
from hexwizards.interfaces.ui import IGameUI

__all__ = [
    "IAIPolicy",
    "IGameUI",
    "IPieceFactory",
]
