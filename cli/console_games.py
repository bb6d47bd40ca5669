"""Terminal game bodies that drive a GameSession."""

import random

from core.difficulty import DifficultyTable
from core.session import GameSession, PRACTICE

PAUSE_COMMAND = 'p'
QUIT_COMMAND = 'q'


def streak_points(streak: int) -> float:
    """Points for a correct answer: 10, plus 10% per answer in the current streak."""
    return 10 * (1 + streak * 0.1)


class ConsoleGame:
    """A game body: owns stimuli and the difficulty table, never the lifecycle."""

    game_id = None
    total_rounds = 10
    levels = None

    def __init__(self, rng=None):
        self.rng = rng or random.Random()

    def params(self, session: GameSession) -> dict:
        return self.levels.get(session.difficulty)

    def play_round(self, ui, session: GameSession) -> bool:
        """Run one trial. Returns False if the player quit."""
        raise NotImplementedError

    def _record(self, session: GameSession, correct: bool, reaction_time_ms: int = None) -> None:
        points = 0
        if correct and session.status != PRACTICE:
            points = streak_points(session.streak + 1)
        session.record_response(correct, reaction_time_ms, points)


class SimpleReactionGame(ConsoleGame):
    """Press Enter as soon as GO appears."""

    game_id = 'simple-reaction'
    total_rounds = 15
    levels = DifficultyTable({
        1: {'min_wait': 1000, 'max_wait': 3000, 'target_duration': 5000},
        2: {'min_wait': 1000, 'max_wait': 3000, 'target_duration': 4000},
        3: {'min_wait': 800, 'max_wait': 3500, 'target_duration': 3500},
        4: {'min_wait': 800, 'max_wait': 4000, 'target_duration': 3000},
        5: {'min_wait': 500, 'max_wait': 4000, 'target_duration': 2500},
        6: {'min_wait': 500, 'max_wait': 4500, 'target_duration': 2000},
        7: {'min_wait': 500, 'max_wait': 5000, 'target_duration': 1500},
        8: {'min_wait': 300, 'max_wait': 5000, 'target_duration': 1200},
        9: {'min_wait': 300, 'max_wait': 5000, 'target_duration': 1000},
        10: {'min_wait': 200, 'max_wait': 5000, 'target_duration': 800},
    })

    def play_round(self, ui, session: GameSession) -> bool:
        config = self.params(session)
        ui.output('Get ready...')
        delay = config['min_wait'] + self.rng.random() * (config['max_wait'] - config['min_wait'])
        ui.sleep(delay / 1000)
        ui.output('GO!')
        session.timer.start()
        answer = ui.ask('')
        reaction_time = session.timer.stop()
        if answer.strip().lower() == QUIT_COMMAND:
            return False

        correct = reaction_time <= config['target_duration']
        if correct:
            ui.output(f'{reaction_time} ms')
        else:
            ui.output(f'Too slow ({reaction_time} ms)')
        self._record(session, correct, reaction_time)
        return True


class NumberSeriesGame(ConsoleGame):
    """Type the next number of an arithmetic or geometric series."""

    game_id = 'number-series'
    total_rounds = 10
    levels = DifficultyTable({
        1: {'length': 4, 'max_step': 3, 'geometric': False},
        2: {'length': 4, 'max_step': 5, 'geometric': False},
        3: {'length': 5, 'max_step': 9, 'geometric': False},
        4: {'length': 5, 'max_step': 12, 'geometric': True},
        5: {'length': 5, 'max_step': 15, 'geometric': True},
        6: {'length': 6, 'max_step': 20, 'geometric': True},
        7: {'length': 6, 'max_step': 25, 'geometric': True},
    })

    def make_series(self, config: dict) -> tuple[list[int], int]:
        """Returns (shown_terms, next_term)."""
        start = self.rng.randint(1, 10)
        if config['geometric'] and self.rng.random() < 0.5:
            ratio = self.rng.randint(2, 3)
            terms = [start * ratio ** i for i in range(config['length'] + 1)]
        else:
            step = self.rng.randint(1, config['max_step'])
            if self.rng.random() < 0.3:
                step = -step
            terms = [start + step * i for i in range(config['length'] + 1)]
        return terms[:-1], terms[-1]

    def play_round(self, ui, session: GameSession) -> bool:
        shown, expected = self.make_series(self.params(session))
        prompt = ', '.join(str(t) for t in shown) + ', ? > '
        session.timer.start()
        while True:
            answer = ui.ask(prompt).strip().lower()
            if answer == QUIT_COMMAND:
                session.timer.reset()
                return False
            if answer == PAUSE_COMMAND:
                if session.pause_game():
                    ui.ask('Paused - press Enter to resume ')
                    session.resume_game()
                else:
                    ui.output('Cannot pause during practice')
                continue
            break
        reaction_time = session.timer.stop()

        try:
            correct = int(answer) == expected
        except ValueError:
            correct = False
        ui.output('Correct!' if correct else f'The answer was {expected}')
        self._record(session, correct, reaction_time)
        return True


CONSOLE_GAMES = {
    SimpleReactionGame.game_id: SimpleReactionGame,
    NumberSeriesGame.game_id: NumberSeriesGame,
}
