from .models import StoredGameResult, ProgressStats, TodayGame, UnlockedAchievement
from .interfaces import Storage, ResultSink
from .timer import ReactionTimer
from .session import GameSession
from .progress import ProgressStore
from .achievements import Achievement, get_achievements, get_achievement_by_id
from .difficulty import DifficultyTable
from .games import get_game, get_games_by_domain
from .harness import SessionRecorder
from .utils import round_half_up
from .config import (
    MIN_DIFFICULTY, MAX_DIFFICULTY, DOMAINS, DOMAIN_LABELS,
    HISTORY_LIMIT, DEFAULT_DOMAIN_SCORE, COUNTDOWN_SECONDS
)

__all__ = [
    'StoredGameResult', 'ProgressStats', 'TodayGame', 'UnlockedAchievement',
    'Storage', 'ResultSink',
    'ReactionTimer', 'GameSession', 'ProgressStore',
    'Achievement', 'get_achievements', 'get_achievement_by_id',
    'DifficultyTable', 'get_game', 'get_games_by_domain',
    'SessionRecorder', 'round_half_up',
    'MIN_DIFFICULTY', 'MAX_DIFFICULTY', 'DOMAINS', 'DOMAIN_LABELS',
    'HISTORY_LIMIT', 'DEFAULT_DOMAIN_SCORE', 'COUNTDOWN_SECONDS'
]
