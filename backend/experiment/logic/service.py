from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from experiment.logic.types import Participant


class NetworkExperiment(ABC):
    """
    Abstract interface for an experiment running on a network of positions.

    Concrete experiments decide how participants in the lobby are placed on
    the network and what a round produces. Callers that share one instance
    across tasks must serialize calls to it.
    """

    @abstractmethod
    def add_user(self, participant: Participant) -> None:
        """
        Add a participant to the lobby, overwriting any entry with the same id.
        """
        ...

    @abstractmethod
    def remove_user(self, participant_id: str) -> None:
        """
        Remove a participant from the lobby and release any position it holds.

        Removing an unknown id is a no-op.
        """
        ...

    @abstractmethod
    def clean_up(self) -> None:
        """
        Restart the experiment, keeping the lobby.
        """
        ...
