"""REST API client for the mindforge server."""

import logging
import threading

import requests

from core.interfaces import ResultSink

logger = logging.getLogger(__name__)


class MindforgeAPIClient(ResultSink):
    """Client for the mindforge REST API.

    Also serves as the remote result sink: submit_result() posts in a
    background thread and discards any failure.
    """

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default",
                 timeout: float = 5.0, background: bool = True):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.timeout = timeout
        self.background = background
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict) -> dict:
        """Make a POST request."""
        response = self.session.post(
            f"{self.base_url}{endpoint}",
            params={'user_id': self.user_id},
            json=data,
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_stats(self) -> dict:
        return self._get("/api/user/stats")

    def get_results(self, limit: int = 50) -> dict:
        return self._get("/api/games/results", {'limit': limit})

    def get_today(self) -> dict:
        return self._get("/api/today")

    def get_achievements(self) -> dict:
        return self._get("/api/achievements")

    def post_result(self, result: dict) -> dict:
        """Post a result and wait for the server's answer."""
        return self._post("/api/games/results", result)

    def submit_result(self, result: dict) -> None:
        """Fire-and-forget mirror of a locally recorded result."""
        if self.background:
            thread = threading.Thread(target=self._submit_quietly, args=(dict(result),), daemon=True)
            thread.start()
        else:
            self._submit_quietly(result)

    def _submit_quietly(self, result: dict) -> None:
        try:
            self.post_result(result)
        except requests.RequestException as e:
            logger.warning(f"Could not sync result for {result.get('gameId')}: {e}")
