"""Tests for the PostgreSQL storage backend, against a mocked connection."""

import unittest
from unittest.mock import MagicMock, patch

import psycopg2
from psycopg2.extras import Json

from server.postgres_storage import PostgresStorage, summary_columns


STATE = {
    'gameResults': [],
    'stats': {'totalGamesPlayed': 7, 'currentStreak': 2, 'longestStreak': 4, 'lastPlayedDate': '2024-03-01'},
}


class TestPostgresStorage(unittest.TestCase):
    """Tests for PostgresStorage."""

    def setUp(self):
        self.conn = MagicMock()
        self.conn.closed = False
        self.cur = MagicMock()
        self.conn.cursor.return_value.__enter__.return_value = self.cur
        patcher = patch('server.postgres_storage.psycopg2.connect', return_value=self.conn)
        self.connect = patcher.start()
        self.addCleanup(patcher.stop)
        self.storage = PostgresStorage('postgresql://test/mindforge')

    def test_connects_lazily_and_creates_schema(self):
        self.connect.assert_not_called()
        self.storage.conn
        self.storage.conn
        self.connect.assert_called_once_with('postgresql://test/mindforge')
        statements = ' '.join(call.args[0] for call in self.cur.execute.call_args_list)
        self.assertIn('CREATE TABLE IF NOT EXISTS progress_state', statements)

    def test_load_state(self):
        self.cur.fetchone.return_value = {'document': STATE}
        self.assertEqual(self.storage.load_state('alice'), STATE)
        self.assertEqual(self.cur.execute.call_args.args[1], ('alice',))

    def test_load_missing(self):
        self.cur.fetchone.return_value = None
        self.assertIsNone(self.storage.load_state('alice'))

    def test_load_error_returns_none(self):
        self.storage.conn
        self.cur.execute.side_effect = psycopg2.OperationalError('gone')
        self.assertIsNone(self.storage.load_state('alice'))

    def test_save_state_writes_summary(self):
        self.storage.save_state(STATE, 'alice')
        params = self.cur.execute.call_args.args[1]
        self.assertEqual(params[0], 'alice')
        self.assertIsInstance(params[1], Json)
        self.assertEqual(params[2:], (7, 2, 4, '2024-03-01'))
        self.conn.commit.assert_called()

    def test_save_error_rolls_back(self):
        self.storage.conn
        self.cur.execute.side_effect = psycopg2.OperationalError('gone')
        with self.assertRaises(psycopg2.Error):
            self.storage.save_state(STATE, 'alice')
        self.conn.rollback.assert_called_once()

    def test_delete_state(self):
        self.cur.rowcount = 1
        self.assertTrue(self.storage.delete_state('alice'))
        self.cur.rowcount = 0
        self.assertFalse(self.storage.delete_state('alice'))

    def test_list_users(self):
        self.cur.fetchall.return_value = [('alice',), ('bob',)]
        self.assertEqual(self.storage.list_users(), ['alice', 'bob'])

    def test_summary_defaults(self):
        self.assertEqual(summary_columns({}), (0, 0, 0, None))


if __name__ == '__main__':
    unittest.main()
