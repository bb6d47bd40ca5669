"""Console UI for mindforge."""

import time

from core.achievements import get_achievements, get_achievement_by_id
from core.config import COUNTDOWN_SECONDS, DOMAINS, DOMAIN_LABELS
from core.games import get_game
from core.harness import SessionRecorder
from core.progress import ProgressStore, plan_difficulty
from core.session import GameSession, PLAYING, PAUSED
from cli.console_games import CONSOLE_GAMES, QUIT_COMMAND, PAUSE_COMMAND


class ConsoleUI:
    """Console user interface: hosts game sessions and shows progress."""

    def __init__(self, store: ProgressStore, ask=input, output=print, sleep=time.sleep):
        self.store = store
        self.ask = ask
        self.output = output
        self.sleep = sleep

    def difficulty_for(self, game: dict) -> int:
        """Today's planned difficulty for the game, else one derived from the domain score."""
        entry = self.store.get_today_entry(game['id'])
        if entry is not None:
            return entry.difficulty
        return plan_difficulty(self.store.get_domain_score(game['domain']))

    def countdown(self) -> None:
        for count in range(COUNTDOWN_SECONDS, 0, -1):
            self.output(f'{count}...')
            self.sleep(1)
        self.output('GO!')

    def play(self, game_id: str, practice_rounds: int = 0):
        """Play one session. Returns (stored_result, unlocked_ids) or None if not recorded."""
        game = get_game(game_id)
        body_class = CONSOLE_GAMES.get(game_id)
        if game is None or body_class is None:
            playable = ', '.join(sorted(CONSOLE_GAMES))
            self.output(f'{game_id} is not playable in the console. Try: {playable}')
            return None

        body = body_class()
        session = GameSession(body.total_rounds, self.difficulty_for(game))
        recorder = SessionRecorder(game, self.store, session)

        self.output('\n' + '=' * 50)
        self.output(f'{game["name"]} (Level {session.difficulty})')
        self.output('=' * 50)
        self.output(game['instructions'])
        self.output(f"Type '{QUIT_COMMAND}' to quit, '{PAUSE_COMMAND}' to pause.\n")

        if practice_rounds > 0 and session.start_practice():
            self.output(f'Practice: {practice_rounds} rounds (not scored)')
            for _ in range(practice_rounds):
                if not body.play_round(self, session):
                    session.reset_game()
                    self.output('Session abandoned.')
                    return None
            self.output(f'Practice accuracy: {session.practice_accuracy:.0f}%\n')

        session.start_countdown()
        self.countdown()
        session.start_game()

        while session.status in (PLAYING, PAUSED):
            self.output(f'\nRound {session.current_round}/{session.total_rounds}')
            if not body.play_round(self, session):
                session.reset_game()
                self.output('Session abandoned.')
                return None
            session.next_round()

        outcome = recorder.sync()
        self.print_session_summary(session)
        if outcome:
            _, unlocked = outcome
            self.print_unlocked(unlocked)
        return outcome

    def print_session_summary(self, session: GameSession):
        self.output('\n' + '-' * 40)
        self.output(f'Score: {int(session.score)}')
        self.output(f'Accuracy: {session.accuracy:.0f}%')
        self.output(f'Best streak: {session.best_streak}')
        if session.reaction_times:
            self.output(f'Average reaction time: {session.average_reaction_time():.0f} ms')
        self.output(f'Duration: {session.duration_seconds()}s')
        self.output('-' * 40)

    def print_unlocked(self, unlocked: list[str]):
        for achievement_id in unlocked:
            achievement = get_achievement_by_id(achievement_id)
            if achievement:
                self.output(f'\n*** ACHIEVEMENT UNLOCKED: {achievement.icon} {achievement.name} ***')

    def print_status(self):
        """Print detailed status."""
        stats = self.store.stats
        self.output('\n' + '=' * 50)
        self.output('STATUS SUMMARY')
        self.output('=' * 50)
        self.output(f'\nOverall score: {self.store.get_overall_score()}')
        self.output(f'Games played: {stats.total_games_played} ({stats.games_played_today} today)')
        self.output(f'Streak: {stats.current_streak} days (longest {stats.longest_streak})')
        self.output(f'Perfect games: {stats.perfect_games}')
        self.output('\nDomain scores:')
        for domain in DOMAINS:
            score = stats.domain_scores[domain]
            bar = '#' * (score // 5)
            self.output(f'  {DOMAIN_LABELS[domain]:<22} {score:>3} {bar}')

        recent = self.store.get_recent_activity()
        if recent:
            self.output('\nRecent games:')
            for result in recent:
                self.output(f'  {result.completed_at[:16]}  {result.game_name:<24} {result.accuracy:>3}%')
        self.output('\n' + '=' * 50 + '\n')

    def print_today(self):
        games = self.store.generate_today_games()
        completed, total = self.store.today_progress()
        self.output(f'\nToday ({self.store.today_date}): {completed}/{total} complete')
        for entry in games:
            mark = 'x' if entry.completed else ' '
            self.output(f'  [{mark}] {entry.name:<24} {DOMAIN_LABELS[entry.domain]:<22} level {entry.difficulty}')
        self.output('')

    def print_remote(self, client):
        """Print the progress the server holds for this user."""
        health = client.health_check()
        self.output(f"\nServer: {client.base_url} ({health.get('status')})")

        summary = client.get_stats()
        stats = summary['stats']
        self.output(f"Overall score: {summary['overall_score']}")
        self.output(f"Games played: {stats['totalGamesPlayed']} ({stats['gamesPlayedToday']} today)")
        self.output(f"Streak: {stats['currentStreak']} days (longest {stats['longestStreak']})")

        today = client.get_today()
        self.output(f"Today ({today['date']}): {today['completed']}/{today['total']} complete")

        achievements = client.get_achievements()
        self.output(f"Achievements: {achievements['unlocked_count']}/{len(achievements['achievements'])}")

        results = client.get_results(limit=5)['results']
        if results:
            self.output('Recent games:')
            for result in results:
                self.output(f"  {result['completedAt'][:16]}  {result['gameName']:<24} {result['accuracy']:>3}%")
        self.output('')

    def print_achievements(self):
        unlocked = {u.achievement_id: u.unlocked_at for u in self.store.get_unlocked_achievements()}
        self.output(f'\nAchievements: {len(unlocked)}/{len(get_achievements())}')
        for achievement in get_achievements():
            if achievement.id in unlocked:
                self.output(f'  {achievement.icon} {achievement.name} - {achievement.description} '
                            f'(unlocked {unlocked[achievement.id][:10]})')
            else:
                self.output(f'  -- {achievement.name} - {achievement.description}')
        self.output('')
