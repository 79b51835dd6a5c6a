"""UI Collaborator Protocol Interface.

This module defines the protocol (interface) for the user-facing side of the
game: dialogue windows and notices shown to the human player.
"""

from typing import Protocol

from hexwizards.domain.models import Player


class IGameUI(Protocol):
    """Protocol defining the calls the engine makes into the user interface.

    Implementations render however they like; the engine neither reads state
    back from the UI nor depends on when the calls are displayed.
    """

    def show_greeting(self, player: Player, recipient: Player) -> None:
        """Show the first-contact dialogue introducing ``player``.

        Args:
            player: The player that was just met
            recipient: The human player the dialogue is shown to
        """
        ...

    def show_notice(self, message: str) -> None:
        """Show a short notice, e.g. why an action was declined.

        Args:
            message: Human readable text
        """
        ...

    def show_panel(self, visible: bool) -> None:
        """Open or close the generic pop-up panel.

        Args:
            visible: Whether the panel should be shown
        """
        ...
