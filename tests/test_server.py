"""Tests for the mindforge REST API."""

import unittest

from fastapi.testclient import TestClient

import server.app as server_app
from core.interfaces import Storage


class InMemoryStorage(Storage):
    """Dict-backed storage for API tests."""

    def __init__(self):
        self.states = {}

    def load_state(self, user_id: str = "default") -> dict | None:
        return self.states.get(user_id)

    def save_state(self, state: dict, user_id: str = "default") -> None:
        self.states[user_id] = state

    def list_users(self) -> list[str]:
        return list(self.states.keys())

    def delete_state(self, user_id: str) -> bool:
        return self.states.pop(user_id, None) is not None


RESULT = {
    'gameId': 'n-back',
    'gameName': 'N-Back',
    'domain': 'memory',
    'score': 120,
    'accuracy': 100,
    'difficulty': 3,
    'completedAt': '2024-03-01T10:00:00',
    'correctAnswers': 10,
    'totalRounds': 10,
}


class TestAPI(unittest.TestCase):
    """Tests for the API endpoints."""

    def setUp(self):
        self.storage = InMemoryStorage()
        server_app.storage = self.storage
        server_app.user_stores.clear()
        self.client = TestClient(server_app.app)

    def tearDown(self):
        server_app.user_stores.clear()
        server_app.storage = None

    def test_health(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'ok')

    def test_list_games(self):
        games = self.client.get('/api/games').json()['games']
        self.assertEqual(len(games), len(server_app.get_all_games()))
        memory = self.client.get('/api/games', params={'domain': 'memory'}).json()['games']
        self.assertTrue(memory)
        self.assertTrue(all(g['domain'] == 'memory' for g in memory))

    def test_list_games_unknown_domain(self):
        self.assertEqual(self.client.get('/api/games', params={'domain': 'cooking'}).status_code, 400)

    def test_post_result(self):
        response = self.client.post('/api/games/results', json=RESULT)
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['unlocked_achievements'], ['first-game', 'perfect-game'])
        self.assertEqual(body['result']['gameId'], 'n-back')
        self.assertTrue(body['result']['id'])
        self.assertEqual(body['stats']['domainScores']['memory'], 100)
        self.assertEqual(self.storage.states['default']['stats']['totalGamesPlayed'], 1)

    def test_post_unknown_domain(self):
        response = self.client.post('/api/games/results', json=dict(RESULT, domain='cooking'))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.storage.states, {})

    def test_post_missing_field(self):
        payload = dict(RESULT)
        del payload['gameId']
        self.assertEqual(self.client.post('/api/games/results', json=payload).status_code, 422)

    def test_results_newest_first(self):
        for accuracy in [60, 70, 80]:
            self.client.post('/api/games/results', json=dict(RESULT, accuracy=accuracy))
        results = self.client.get('/api/games/results', params={'limit': 2}).json()['results']
        self.assertEqual([r['accuracy'] for r in results], [80, 70])

    def test_stats(self):
        self.client.post('/api/games/results', json=RESULT)
        body = self.client.get('/api/user/stats').json()
        self.assertEqual(body['stats']['totalGamesPlayed'], 1)
        self.assertEqual(body['stats']['currentStreak'], 1)
        self.assertEqual(body['overall_score'], 60)
        self.assertEqual(body['unlocked_count'], 2)

    def test_users_are_isolated(self):
        self.client.post('/api/games/results', params={'user_id': 'alice'}, json=RESULT)
        bob = self.client.get('/api/user/stats', params={'user_id': 'bob'}).json()
        self.assertEqual(bob['stats']['totalGamesPlayed'], 0)
        self.assertIn('alice', self.storage.states)

    def test_invalid_user_id(self):
        response = self.client.get('/api/user/stats', params={'user_id': '../etc/passwd'})
        self.assertEqual(response.status_code, 400)

    def test_today_is_stable(self):
        first = self.client.get('/api/today').json()
        second = self.client.get('/api/today').json()
        self.assertEqual(first['total'], 5)
        self.assertEqual(first['completed'], 0)
        self.assertEqual(first['games'], second['games'])

    def test_posting_planned_game_marks_it(self):
        plan = self.client.get('/api/today').json()['games']
        entry = plan[0]
        result = dict(RESULT, gameId=entry['gameId'], gameName=entry['name'], domain=entry['domain'])
        self.client.post('/api/games/results', json=result)
        today = self.client.get('/api/today').json()
        self.assertEqual(today['completed'], 1)
        self.assertTrue(today['games'][0]['completed'])

    def test_achievements(self):
        self.client.post('/api/games/results', json=RESULT)
        body = self.client.get('/api/achievements').json()
        self.assertEqual(len(body['achievements']), 14)
        by_id = {a['id']: a for a in body['achievements']}
        self.assertTrue(by_id['first-game']['unlocked'])
        self.assertIsNotNone(by_id['first-game']['unlockedAt'])
        self.assertFalse(by_id['ten-games']['unlocked'])
        self.assertIsNone(by_id['ten-games']['unlockedAt'])

    def test_reset(self):
        self.client.post('/api/games/results', json=RESULT)
        self.assertTrue(self.client.post('/api/progress/reset').json()['success'])
        body = self.client.get('/api/user/stats').json()
        self.assertEqual(body['stats']['totalGamesPlayed'], 0)
        self.assertEqual(body['unlocked_count'], 0)


if __name__ == '__main__':
    unittest.main()
