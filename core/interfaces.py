"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class Storage(ABC):
    """Abstract base class for progress state storage.

    A user's whole progress document is read and written as one JSON-shaped
    dict, so a failed write leaves the previous document intact.
    """

    @abstractmethod
    def load_state(self, user_id: str = "default") -> dict | None:
        """Load state for a user. Returns state dict or None if not found."""
        pass

    @abstractmethod
    def save_state(self, state: dict, user_id: str = "default") -> None:
        """Save state for a user."""
        pass

    @abstractmethod
    def list_users(self) -> list[str]:
        """List all user IDs that have stored state."""
        pass

    @abstractmethod
    def delete_state(self, user_id: str) -> bool:
        """Delete a user's state. Returns True if something was deleted."""
        pass


class ResultSink(ABC):
    """Abstract base class for a one-way mirror of completed game results."""

    @abstractmethod
    def submit_result(self, result: dict) -> None:
        """Submit a result payload. Delivery is best-effort and at most once."""
        pass
