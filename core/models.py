"""Domain models for mindforge progress tracking."""

from .config import DOMAINS, DEFAULT_DOMAIN_SCORE, MIN_DOMAIN_SCORE, MAX_DOMAIN_SCORE
from .utils import clamp, round_half_up


class StoredGameResult:
    """One completed session. Immutable once created."""

    _FIELDS = ('id', 'game_id', 'game_name', 'domain', 'score', 'accuracy', 'difficulty',
               'completed_at', 'correct_answers', 'total_rounds')

    def __init__(self, id: str, game_id: str, game_name: str, domain: str, score: int,
                 accuracy: int, difficulty: int, completed_at: str, correct_answers: int = 0,
                 total_rounds: int = 1):
        values = {
            'id': id,
            'game_id': game_id,
            'game_name': game_name,
            'domain': domain,
            'score': score,
            'accuracy': accuracy,
            'difficulty': difficulty,
            'completed_at': completed_at,
            'correct_answers': correct_answers,
            'total_rounds': total_rounds,
        }
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"StoredGameResult is immutable (cannot set {name})")

    def __eq__(self, other):
        if not isinstance(other, StoredGameResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"StoredGameResult(id={self.id!r}, game_id={self.game_id!r}, accuracy={self.accuracy})"

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'gameId': self.game_id,
            'gameName': self.game_name,
            'domain': self.domain,
            'score': self.score,
            'accuracy': self.accuracy,
            'difficulty': self.difficulty,
            'completedAt': self.completed_at,
            'correctAnswers': self.correct_answers,
            'totalRounds': self.total_rounds,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'StoredGameResult':
        return cls(
            id=data.get('id', ''),
            game_id=data['gameId'],
            game_name=data.get('gameName', data['gameId']),
            domain=data['domain'],
            score=data.get('score', 0),
            accuracy=data.get('accuracy', 0),
            difficulty=data.get('difficulty', 1),
            completed_at=data.get('completedAt'),
            correct_answers=data.get('correctAnswers', 0),
            total_rounds=data.get('totalRounds', 1),
        )


class ProgressStats:
    """Rolled-up progress: totals, streaks and per-domain skill scores."""

    def __init__(self):
        self.total_games_played = 0
        self.games_played_today = 0
        self.current_streak = 0
        self.longest_streak = 0
        self.last_played_date = None  # YYYY-MM-DD
        self.domain_scores = {domain: DEFAULT_DOMAIN_SCORE for domain in DOMAINS}
        self.domain_games_played = {domain: 0 for domain in DOMAINS}
        self.perfect_games = 0
        self.total_correct_answers = 0

    def domains_played(self) -> int:
        return len([d for d in DOMAINS if self.domain_games_played.get(d, 0) > 0])

    def to_dict(self) -> dict:
        return {
            'totalGamesPlayed': self.total_games_played,
            'gamesPlayedToday': self.games_played_today,
            'currentStreak': self.current_streak,
            'longestStreak': self.longest_streak,
            'lastPlayedDate': self.last_played_date,
            'domainScores': dict(self.domain_scores),
            'domainGamesPlayed': dict(self.domain_games_played),
            'perfectGames': self.perfect_games,
            'totalCorrectAnswers': self.total_correct_answers,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ProgressStats':
        stats = cls()
        stats.total_games_played = int(data.get('totalGamesPlayed', 0))
        stats.games_played_today = int(data.get('gamesPlayedToday', 0))
        stats.current_streak = int(data.get('currentStreak', 0))
        stats.longest_streak = max(int(data.get('longestStreak', 0)), stats.current_streak)
        stats.last_played_date = data.get('lastPlayedDate')
        scores = data.get('domainScores') or {}
        played = data.get('domainGamesPlayed') or {}
        for domain in DOMAINS:
            score = scores.get(domain, DEFAULT_DOMAIN_SCORE)
            stats.domain_scores[domain] = clamp(round_half_up(score), MIN_DOMAIN_SCORE, MAX_DOMAIN_SCORE)
            stats.domain_games_played[domain] = int(played.get(domain, 0))
        stats.perfect_games = int(data.get('perfectGames', 0))
        stats.total_correct_answers = int(data.get('totalCorrectAnswers', 0))
        return stats


class TodayGame:
    """One entry of the daily plan."""

    def __init__(self, id: str, game_id: str, name: str, domain: str, difficulty: int):
        self.id = id
        self.game_id = game_id
        self.name = name
        self.domain = domain
        self.difficulty = difficulty
        self.completed = False
        self.result = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'gameId': self.game_id,
            'name': self.name,
            'domain': self.domain,
            'difficulty': self.difficulty,
            'completed': self.completed,
            'result': self.result.to_dict() if self.result else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TodayGame':
        game = cls(data['id'], data['gameId'], data.get('name', data['gameId']),
                   data['domain'], data.get('difficulty', 1))
        game.completed = data.get('completed', False)
        result = data.get('result')
        game.result = StoredGameResult.from_dict(result) if result else None
        return game


class UnlockedAchievement:
    def __init__(self, achievement_id: str, unlocked_at: str):
        self.achievement_id = achievement_id
        self.unlocked_at = unlocked_at

    def to_dict(self) -> dict:
        return {'achievementId': self.achievement_id, 'unlockedAt': self.unlocked_at}

    @classmethod
    def from_dict(cls, data: dict) -> 'UnlockedAchievement':
        return cls(data['achievementId'], data.get('unlockedAt'))
