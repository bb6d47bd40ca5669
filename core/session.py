"""Session state machine shared by every training game."""

import logging
import math
import time

from .config import MIN_DIFFICULTY, MAX_DIFFICULTY, DEFAULT_TOTAL_ROUNDS
from .timer import ReactionTimer
from .utils import clamp, round_half_up

logger = logging.getLogger(__name__)

INSTRUCTIONS = 'instructions'
COUNTDOWN = 'countdown'
PLAYING = 'playing'
PRACTICE = 'practice'
PAUSED = 'paused'
COMPLETE = 'complete'

STATUSES = [INSTRUCTIONS, COUNTDOWN, PLAYING, PRACTICE, PAUSED, COMPLETE]

# Difficulty may only change before play begins
_DIFFICULTY_STATES = {INSTRUCTIONS, PRACTICE, COUNTDOWN}


class GameSession:
    """Lifecycle, round progression and response scoring for one play-through.

    instructions -> countdown -> playing <-> paused -> complete, with an
    optional practice detour from instructions. Every operation returns True
    when it took effect. Calls made from a state where they do not apply are
    ignored and return False: a timer firing just after a pause or exit must
    not break the session.
    """

    def __init__(self, total_rounds: int = DEFAULT_TOTAL_ROUNDS, initial_difficulty: int = MIN_DIFFICULTY,
                 clock=time.time, timer: ReactionTimer = None):
        # At least one round, so current_round <= total_rounds holds from start_game
        self.initial_total_rounds = max(1, int(total_rounds))
        self.initial_difficulty = clamp(int(initial_difficulty), MIN_DIFFICULTY, MAX_DIFFICULTY)
        self._clock = clock
        self.timer = timer or ReactionTimer()
        self._init_state()

    def _init_state(self) -> None:
        self.status = INSTRUCTIONS
        self.current_round = 0
        self.total_rounds = self.initial_total_rounds
        self.difficulty = self.initial_difficulty
        self.score = 0
        self.accuracy = 0.0
        self.streak = 0
        self.best_streak = 0
        self.reaction_times = []
        self.correct_count = 0
        self.response_count = 0
        self.practice_correct = 0
        self.practice_responses = 0
        self.lives = None
        self.start_time = None
        self.end_time = None
        self._paused_at = None
        self._paused_seconds = 0.0
        self.timer.reset()

    def _ignore(self, operation: str) -> bool:
        logger.debug(f"Ignoring {operation} while {self.status}")
        return False

    # Transitions

    def start_countdown(self) -> bool:
        if self.status not in (INSTRUCTIONS, PRACTICE):
            return self._ignore('start_countdown')
        self.status = COUNTDOWN
        return True

    def start_practice(self) -> bool:
        """Enter practice. Practice responses never reach the scored fields."""
        if self.status != INSTRUCTIONS:
            return self._ignore('start_practice')
        self.status = PRACTICE
        self.practice_correct = 0
        self.practice_responses = 0
        return True

    def start_game(self) -> bool:
        """Begin round 1. Normally called by the host once the countdown elapses."""
        if self.status != COUNTDOWN:
            return self._ignore('start_game')
        self.status = PLAYING
        self.start_time = self._clock()
        self.end_time = None
        self._paused_at = None
        self._paused_seconds = 0.0
        self.current_round = 1
        self.score = 0
        self.accuracy = 0.0
        self.streak = 0
        self.best_streak = 0
        self.reaction_times = []
        self.correct_count = 0
        self.response_count = 0
        return True

    def pause_game(self) -> bool:
        if self.status != PLAYING:
            return self._ignore('pause_game')
        self.status = PAUSED
        self._paused_at = self._clock()
        self.timer.pause()
        return True

    def resume_game(self) -> bool:
        if self.status != PAUSED:
            return self._ignore('resume_game')
        self.status = PLAYING
        if self._paused_at is not None:
            self._paused_seconds += self._clock() - self._paused_at
            self._paused_at = None
        self.timer.resume()
        return True

    def complete_game(self) -> bool:
        if self.status != PLAYING:
            return self._ignore('complete_game')
        self.status = COMPLETE
        self.end_time = self._clock()
        self.timer.reset()
        return True

    def reset_game(self) -> bool:
        """Back to instructions with every field reinitialised."""
        self._init_state()
        return True

    # Play

    def next_round(self) -> bool:
        """Advance a round; moving past the last round completes the game."""
        if self.status != PLAYING:
            return self._ignore('next_round')
        if self.current_round + 1 > self.total_rounds:
            return self.complete_game()
        self.current_round += 1
        return True

    def record_response(self, correct: bool, reaction_time_ms: int = None, points: float = 0) -> bool:
        """Record one response. Round advancement is separate (next_round)."""
        if self.status == PRACTICE:
            self.practice_responses += 1
            if correct:
                self.practice_correct += 1
            return True
        if self.status != PLAYING:
            return self._ignore('record_response')

        if reaction_time_ms is not None:
            self.reaction_times.append(reaction_time_ms)

        self.response_count += 1
        if correct:
            self.correct_count += 1
            self.streak += 1
        else:
            self.streak = 0
        self.best_streak = max(self.best_streak, self.streak)
        self.accuracy = 100 * self.correct_count / self.response_count

        if points:
            self.score = max(0, self.score + points)
        return True

    def add_score(self, points: float) -> bool:
        if self.status != PLAYING:
            return self._ignore('add_score')
        self.score = max(0, self.score + points)
        return True

    def set_difficulty(self, level: int) -> bool:
        if self.status not in _DIFFICULTY_STATES:
            return self._ignore('set_difficulty')
        self.difficulty = clamp(int(level), MIN_DIFFICULTY, MAX_DIFFICULTY)
        return True

    def set_lives(self, lives: int) -> bool:
        if self.status == COMPLETE:
            return self._ignore('set_lives')
        self.lives = max(0, int(lives))
        return True

    def lose_life(self) -> bool:
        """Lose a life; the last one ends the game."""
        if self.status != PLAYING:
            return self._ignore('lose_life')
        self.lives = max(0, (self.lives or 0) - 1)
        if self.lives == 0:
            self.complete_game()
        return True

    # Derived values

    @property
    def is_complete(self) -> bool:
        return self.status == COMPLETE

    @property
    def practice_accuracy(self) -> float:
        if self.practice_responses == 0:
            return 0.0
        return 100 * self.practice_correct / self.practice_responses

    def average_reaction_time(self) -> float:
        if not self.reaction_times:
            return 0
        return sum(self.reaction_times) / len(self.reaction_times)

    def duration_seconds(self) -> int:
        """Whole seconds of active play, excluding paused time."""
        if self.start_time is None:
            return 0
        end = self.end_time
        if end is None:
            end = self._paused_at if self._paused_at is not None else self._clock()
        return max(0, math.floor(end - self.start_time - self._paused_seconds))

    def correct_answers(self) -> int:
        """Correct answers scaled to the round count, as reported in results."""
        return round_half_up(self.accuracy / 100 * self.total_rounds)

    def build_result(self, game: dict, completed_at: str) -> dict | None:
        """Outbound result payload for a completed session, else None.

        game is a catalog registration ({id, name, domain, ...}).
        """
        if self.status != COMPLETE:
            return None
        return {
            'gameId': game['id'],
            'gameName': game['name'],
            'domain': game['domain'],
            'score': math.floor(self.score),
            'accuracy': round_half_up(self.accuracy),
            'difficulty': self.difficulty,
            'completedAt': completed_at,
            'correctAnswers': self.correct_answers(),
            'totalRounds': self.total_rounds,
        }

    def to_dict(self) -> dict:
        return {
            'status': self.status,
            'current_round': self.current_round,
            'total_rounds': self.total_rounds,
            'difficulty': self.difficulty,
            'score': self.score,
            'accuracy': self.accuracy,
            'streak': self.streak,
            'best_streak': self.best_streak,
            'reaction_times': list(self.reaction_times),
            'lives': self.lives,
        }
