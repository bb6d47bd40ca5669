"""Progress aggregation: history, streaks, domain scores, daily plan, achievements."""

import logging
import random
from datetime import date, datetime

from .achievements import evaluate_achievements
from .config import (
    DOMAINS, HISTORY_LIMIT, MIN_DOMAIN_SCORE, MAX_DOMAIN_SCORE,
    MAX_DOMAIN_WEIGHT, MIN_DIFFICULTY, MAX_DIFFICULTY, DAILY_PLAN_SIZE,
    RECENT_ACTIVITY_LIMIT
)
from .games import get_random_game
from .interfaces import Storage, ResultSink
from .models import StoredGameResult, ProgressStats, TodayGame, UnlockedAchievement
from .utils import clamp, round_half_up, date_key, previous_day_key, timestamp, generate_result_id

logger = logging.getLogger(__name__)


def next_domain_score(old_score: float, games_in_domain: int, accuracy: float) -> int:
    """Exponentially weighted domain score.

    The first result in a domain sets the score outright (weight 1.0); later
    results move it by at most MAX_DOMAIN_WEIGHT.
    """
    if games_in_domain <= 0:
        weight = 1.0
    else:
        weight = min(MAX_DOMAIN_WEIGHT, 1 / (games_in_domain + 1))
    score = round_half_up(old_score * (1 - weight) + accuracy * weight)
    return clamp(score, MIN_DOMAIN_SCORE, MAX_DOMAIN_SCORE)


def plan_difficulty(domain_score: float) -> int:
    return clamp(round_half_up(domain_score / 10), MIN_DIFFICULTY, MAX_DIFFICULTY)


class ProgressStore:
    """Durable per-user progress.

    Each mutation runs to completion (history, stats, achievements) before
    the state is written through to storage, so readers never see a partial
    update. The optional result sink is a best-effort remote mirror called
    after the local commit; its failures never touch local state.
    """

    def __init__(self, storage: Storage = None, user_id: str = "default", sink: ResultSink = None,
                 today=None, now=None, rng=None):
        self.storage = storage
        self.user_id = user_id
        self.sink = sink
        self._today = today or date.today
        self._now = now or datetime.now
        self._rng = rng or random.Random()
        self._init_state()

    def _init_state(self) -> None:
        self.game_results = []  # oldest first
        self.today_games = []
        self.today_date = None
        self.unlocked_achievements = []
        self.stats = ProgressStats()

    # Persistence

    def to_dict(self) -> dict:
        return {
            'gameResults': [r.to_dict() for r in self.game_results],
            'todayGames': [g.to_dict() for g in self.today_games],
            'todayDate': self.today_date,
            'unlockedAchievements': [u.to_dict() for u in self.unlocked_achievements],
            'stats': self.stats.to_dict(),
        }

    def load_dict(self, data: dict | None) -> None:
        """Replace the in-memory state with a persisted document.

        A missing or unreadable document leaves the defaults in place.
        """
        self._init_state()
        if not data:
            return
        try:
            game_results = [StoredGameResult.from_dict(r) for r in data.get('gameResults') or []]
            today_games = [TodayGame.from_dict(g) for g in data.get('todayGames') or []]
            unlocked = [UnlockedAchievement.from_dict(u) for u in data.get('unlockedAchievements') or []]
            stats = ProgressStats.from_dict(data.get('stats') or {})
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Discarding unreadable progress state for {self.user_id}: {e}")
            return
        self.game_results = game_results[-HISTORY_LIMIT:]
        self.today_games = today_games
        self.today_date = data.get('todayDate')
        seen = set()
        for unlock in unlocked:
            if unlock.achievement_id not in seen:
                seen.add(unlock.achievement_id)
                self.unlocked_achievements.append(unlock)
        self.stats = stats

    @classmethod
    def from_dict(cls, data: dict | None, **kwargs) -> 'ProgressStore':
        store = cls(**kwargs)
        store.load_dict(data)
        return store

    def load(self) -> None:
        """Rehydrate from storage."""
        if self.storage is None:
            return
        try:
            state = self.storage.load_state(self.user_id)
        except Exception as e:
            logger.warning(f"Could not load progress for {self.user_id}: {e}")
            state = None
        self.load_dict(state)

    def save(self) -> None:
        if self.storage is not None:
            self.storage.save_state(self.to_dict(), self.user_id)

    def _commit(self) -> None:
        try:
            self.save()
        except Exception as e:
            logger.error(f"Failed to save progress for {self.user_id}: {e}")

    # Results

    def record_game_result(self, result: dict) -> tuple[StoredGameResult | None, list[str]]:
        """Store a completed session and fold it into the stats.

        result is the outbound payload shape ({gameId, gameName, domain, score,
        accuracy, difficulty, completedAt, correctAnswers, totalRounds}).
        Returns (stored_result, newly_unlocked_achievement_ids). A result for an
        unknown domain is ignored and returns (None, []).
        """
        domain = result.get('domain')
        if domain not in DOMAINS:
            logger.warning(f"Ignoring result for unknown domain {domain!r} (game {result.get('gameId')!r})")
            return None, []

        accuracy = clamp(result.get('accuracy', 0), 0, 100)
        stored = StoredGameResult(
            id=generate_result_id(),
            game_id=result['gameId'],
            game_name=result.get('gameName', result['gameId']),
            domain=domain,
            score=max(0, result.get('score', 0)),
            accuracy=accuracy,
            difficulty=clamp(result.get('difficulty', MIN_DIFFICULTY), MIN_DIFFICULTY, MAX_DIFFICULTY),
            completed_at=result.get('completedAt') or timestamp(self._now()),
            correct_answers=max(0, result.get('correctAnswers', 0)),
            total_rounds=result.get('totalRounds', 1),
        )

        self.game_results.append(stored)
        if len(self.game_results) > HISTORY_LIMIT:
            self.game_results = self.game_results[-HISTORY_LIMIT:]

        self._update_stats(stored)
        newly_unlocked = self.check_and_unlock_achievements(commit=False)
        self._commit()
        logger.info(f"Recorded {stored.game_id} for {self.user_id}: accuracy={stored.accuracy} "
                    f"streak={self.stats.current_streak}")
        self._mirror(stored)
        return stored, newly_unlocked

    def _update_stats(self, result: StoredGameResult) -> None:
        stats = self.stats
        today = self._today()
        today_key = date_key(today)
        last_date = stats.last_played_date

        # Only the first result of a new day moves the streak
        if last_date == today_key:
            stats.games_played_today += 1
        else:
            if last_date == previous_day_key(today):
                stats.current_streak += 1
            else:
                stats.current_streak = 1
            stats.longest_streak = max(stats.longest_streak, stats.current_streak)
            stats.games_played_today = 1
        stats.last_played_date = today_key

        domain = result.domain
        games_in_domain = stats.domain_games_played.get(domain, 0)
        stats.domain_scores[domain] = next_domain_score(
            stats.domain_scores[domain], games_in_domain, result.accuracy
        )
        stats.domain_games_played[domain] = games_in_domain + 1

        stats.total_games_played += 1
        if result.accuracy == 100:
            stats.perfect_games += 1
        stats.total_correct_answers += result.correct_answers

    def _mirror(self, result: StoredGameResult) -> None:
        if self.sink is None:
            return
        payload = result.to_dict()
        payload.pop('id', None)
        try:
            self.sink.submit_result(payload)
        except Exception as e:
            logger.warning(f"Result sync failed for {self.user_id}: {e}")

    # Daily plan

    def generate_today_games(self) -> list[TodayGame]:
        """Build today's plan: one game per domain at a skill-matched difficulty.

        Does nothing if a plan for today already exists.
        """
        today_key = date_key(self._today())
        if self.today_date == today_key and self.today_games:
            return self.today_games

        domains = list(DOMAINS)
        self._rng.shuffle(domains)

        plan = []
        for index, domain in enumerate(domains[:DAILY_PLAN_SIZE]):
            game = get_random_game(domain, self._rng)
            if game is None:
                continue
            plan.append(TodayGame(
                id=f"today-{index}-{game['id']}",
                game_id=game['id'],
                name=game['name'],
                domain=domain,
                difficulty=plan_difficulty(self.stats.domain_scores[domain]),
            ))

        self.today_games = plan
        self.today_date = today_key
        self._commit()
        return self.today_games

    def mark_today_game_complete(self, game_id: str, result: StoredGameResult) -> bool:
        """Mark the plan entry for game_id done. Returns False if it is not in the plan."""
        found = False
        for game in self.today_games:
            if game.game_id == game_id:
                game.completed = True
                game.result = result
                found = True
        if found:
            self._commit()
        return found

    def get_today_entry(self, game_id: str) -> TodayGame | None:
        """The plan entry for game_id, if a plan exists for the current day."""
        if self.today_date != date_key(self._today()):
            return None
        for game in self.today_games:
            if game.game_id == game_id:
                return game
        return None

    def today_progress(self) -> tuple[int, int]:
        """(completed, total) entries in today's plan."""
        return len([g for g in self.today_games if g.completed]), len(self.today_games)

    # Achievements

    def check_and_unlock_achievements(self, commit: bool = True) -> list[str]:
        """Unlock every achievement the current stats satisfy, in one batch."""
        unlocked_ids = [u.achievement_id for u in self.unlocked_achievements]
        newly_unlocked = evaluate_achievements(self.stats, unlocked_ids)
        if newly_unlocked:
            unlocked_at = timestamp(self._now())
            self.unlocked_achievements.extend(
                UnlockedAchievement(achievement_id, unlocked_at) for achievement_id in newly_unlocked
            )
            logger.info(f"Unlocked achievements for {self.user_id}: {', '.join(newly_unlocked)}")
            if commit:
                self._commit()
        return newly_unlocked

    def is_unlocked(self, achievement_id: str) -> bool:
        return any(u.achievement_id == achievement_id for u in self.unlocked_achievements)

    def get_unlocked_achievements(self) -> list[UnlockedAchievement]:
        return list(self.unlocked_achievements)

    # Queries

    def current_timestamp(self) -> str:
        return timestamp(self._now())

    def get_recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[StoredGameResult]:
        """Most recent results, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self.game_results[-limit:]))

    def get_domain_score(self, domain: str) -> int | None:
        return self.stats.domain_scores.get(domain)

    def get_overall_score(self) -> int:
        scores = [self.stats.domain_scores[domain] for domain in DOMAINS]
        return round_half_up(sum(scores) / len(scores))

    def reset_progress(self) -> None:
        self._init_state()
        self._commit()
        logger.info(f"Progress reset for {self.user_id}")
