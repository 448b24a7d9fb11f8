"""Abstract repository for the actors the engine authorizes."""

from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace.domain.model.actor import Actor


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> Actor | None:
        """Return the actor with this ID, or None."""
