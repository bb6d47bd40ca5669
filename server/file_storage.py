"""File-based storage implementation."""

import json
import logging
import os

from core.config import STATE_FILE_PREFIX
from core.interfaces import Storage

logger = logging.getLogger(__name__)


def default_state_dir() -> str:
    return os.environ.get('MINDFORGE_STATE_DIR') or os.path.expanduser('~/.local/share/mindforge')


class FileStorage(Storage):
    """One JSON document per user in a state directory."""

    def __init__(self, state_dir: str = None):
        self.state_dir = state_dir or default_state_dir()

    def _get_state_file(self, user_id: str) -> str:
        """Get state file path for a user."""
        if user_id == "default":
            return os.path.join(self.state_dir, f'{STATE_FILE_PREFIX}.json')
        return os.path.join(self.state_dir, f'{STATE_FILE_PREFIX}_{user_id}.json')

    def load_state(self, user_id: str = "default") -> dict | None:
        state_file = self._get_state_file(user_id)
        if os.path.exists(state_file):
            try:
                with open(state_file, 'r') as f:
                    return json.load(f)
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable state file {state_file}: {e}")
                return None
        return None

    def save_state(self, state: dict, user_id: str = "default") -> None:
        """Write the whole document to a temp file, then swap it into place."""
        os.makedirs(self.state_dir, exist_ok=True)
        state_file = self._get_state_file(user_id)
        tmp_file = state_file + '.tmp'
        with open(tmp_file, 'w') as f:
            json.dump(state, f, indent=2)
        os.replace(tmp_file, state_file)

    def list_users(self) -> list[str]:
        """List all existing user IDs."""
        users = []
        prefix = f'{STATE_FILE_PREFIX}_'
        if os.path.exists(self.state_dir):
            for filename in os.listdir(self.state_dir):
                if filename == f'{STATE_FILE_PREFIX}.json':
                    users.append('default')
                elif filename.startswith(prefix) and filename.endswith('.json'):
                    users.append(filename[len(prefix):-len('.json')])
        return sorted(users)

    def user_exists(self, user_id: str) -> bool:
        return os.path.exists(self._get_state_file(user_id))

    def delete_state(self, user_id: str) -> bool:
        """Delete a user's state file."""
        state_file = self._get_state_file(user_id)
        if os.path.exists(state_file):
            os.remove(state_file)
            return True
        return False
