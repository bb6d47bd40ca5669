"""Configuration constants for mindforge."""

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10

# Session defaults
DEFAULT_TOTAL_ROUNDS = 20
COUNTDOWN_SECONDS = 3         # 3, 2, 1, GO!

# Cognitive domains
DOMAINS = ['memory', 'attention', 'speed', 'problem_solving', 'flexibility']
DOMAIN_LABELS = {
    'memory': 'Memory',
    'attention': 'Attention',
    'speed': 'Processing Speed',
    'problem_solving': 'Problem Solving',
    'flexibility': 'Cognitive Flexibility',
}

# Progress tracking
HISTORY_LIMIT = 500           # Stored results kept, oldest evicted first
DEFAULT_DOMAIN_SCORE = 50     # Neutral midpoint for an untrained domain
MIN_DOMAIN_SCORE = 0
MAX_DOMAIN_SCORE = 100
MAX_DOMAIN_WEIGHT = 0.3       # Cap on how much one result moves a domain score
DAILY_PLAN_SIZE = 5           # One game per domain
RECENT_ACTIVITY_LIMIT = 10

# Storage
DEFAULT_STORAGE = 'file'
STATE_FILE_PREFIX = 'mindforge_state'
