"""Achievement catalog and evaluation."""

from .config import DOMAINS

# Metrics a threshold rule can compare against
TOTAL_GAMES_PLAYED = 'total_games_played'
CURRENT_STREAK = 'current_streak'
PERFECT_GAMES = 'perfect_games'
DOMAIN_GAMES_PLAYED = 'domain_games_played'

METRICS = [TOTAL_GAMES_PLAYED, CURRENT_STREAK, PERFECT_GAMES, DOMAIN_GAMES_PLAYED]
CATEGORIES = ['games', 'streak', 'score', 'special']


class Achievement:
    """A static achievement rule.

    Most rules are "metric >= requirement". A rule that needs other logic
    passes a pure check(stats) function instead of a metric.
    """

    def __init__(self, id: str, name: str, description: str, icon: str, category: str,
                 requirement: int, metric: str = None, domain: str = None, check=None):
        if check is None and metric not in METRICS:
            raise ValueError(f"Unknown achievement metric: {metric}")
        if metric == DOMAIN_GAMES_PLAYED and domain not in DOMAINS:
            raise ValueError(f"Unknown achievement domain: {domain}")
        if category not in CATEGORIES:
            raise ValueError(f"Unknown achievement category: {category}")
        self.id = id
        self.name = name
        self.description = description
        self.icon = icon
        self.category = category
        self.requirement = requirement
        self.metric = metric
        self.domain = domain
        self.check = check

    def current_value(self, stats) -> int | None:
        """The stats value this rule compares, or None for custom checks."""
        if self.metric == TOTAL_GAMES_PLAYED:
            return stats.total_games_played
        if self.metric == CURRENT_STREAK:
            return stats.current_streak
        if self.metric == PERFECT_GAMES:
            return stats.perfect_games
        if self.metric == DOMAIN_GAMES_PLAYED:
            return stats.domain_games_played.get(self.domain, 0)
        return None

    def is_met(self, stats) -> bool:
        if self.check is not None:
            return bool(self.check(stats))
        return self.current_value(stats) >= self.requirement

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'category': self.category,
            'requirement': self.requirement,
        }


def _all_domains_played(stats) -> bool:
    return stats.domains_played() >= len(DOMAINS)


ACHIEVEMENTS = [
    # Games
    Achievement('first-game', 'First Steps', 'Complete your first game', '🎮', 'games', 1, TOTAL_GAMES_PLAYED),
    Achievement('ten-games', 'Getting Started', 'Complete 10 games', '🎯', 'games', 10, TOTAL_GAMES_PLAYED),
    Achievement('fifty-games', 'Dedicated Trainer', 'Complete 50 games', '💪', 'games', 50, TOTAL_GAMES_PLAYED),
    Achievement('hundred-games', 'Century Club', 'Complete 100 games', '🏆', 'games', 100, TOTAL_GAMES_PLAYED),
    Achievement('five-hundred-games', 'Brain Master', 'Complete 500 games', '👑', 'games', 500,
                TOTAL_GAMES_PLAYED),
    # Streaks
    Achievement('streak-3', 'On Fire', 'Maintain a 3-day streak', '🔥', 'streak', 3, CURRENT_STREAK),
    Achievement('streak-7', 'Week Warrior', 'Maintain a 7-day streak', '⚡', 'streak', 7, CURRENT_STREAK),
    Achievement('streak-14', 'Fortnight Focus', 'Maintain a 14-day streak', '🌟', 'streak', 14, CURRENT_STREAK),
    Achievement('streak-30', 'Monthly Master', 'Maintain a 30-day streak', '🏅', 'streak', 30, CURRENT_STREAK),
    # Score
    Achievement('perfect-game', 'Perfect!', 'Get 100% accuracy in a game', '✨', 'score', 1, PERFECT_GAMES),
    Achievement('ten-perfect', 'Precision Pro', 'Get 10 perfect games', '💎', 'score', 10, PERFECT_GAMES),
    # Special
    Achievement('all-domains', 'Well Rounded', 'Play a game in each domain', '🧠', 'special', len(DOMAINS),
                check=_all_domains_played),
    Achievement('memory-master', 'Memory Master', 'Play 20 memory games', '🎭', 'special', 20,
                DOMAIN_GAMES_PLAYED, domain='memory'),
    Achievement('speed-demon', 'Speed Demon', 'Play 20 speed games', '⚡', 'special', 20,
                DOMAIN_GAMES_PLAYED, domain='speed'),
]

_ACHIEVEMENTS_BY_ID = {achievement.id: achievement for achievement in ACHIEVEMENTS}


def get_achievements() -> list[Achievement]:
    return list(ACHIEVEMENTS)


def get_achievement_by_id(achievement_id: str) -> Achievement | None:
    return _ACHIEVEMENTS_BY_ID.get(achievement_id)


def evaluate_achievements(stats, unlocked_ids) -> list[str]:
    """Ids of achievements not yet unlocked whose rule the stats now satisfy.

    Every locked rule is checked against the full stats on every call, in
    catalog order.
    """
    unlocked = set(unlocked_ids)
    return [a.id for a in ACHIEVEMENTS if a.id not in unlocked and a.is_met(stats)]
