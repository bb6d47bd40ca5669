"""Static catalog of the training games, grouped by cognitive domain."""

import random

from .config import DOMAINS

# Game id -> registration data. Ids are the public keys used by results and plans.
# Games with 'plannable': False are playable but never picked for the daily plan.
GAMES = {
    # Memory
    'memory-matrix': {
        'name': 'Memory Matrix',
        'domain': 'memory',
        'description': 'Remember and reproduce sequences of highlighted squares.',
        'instructions': 'Watch the squares light up in sequence, then tap them in the same order.',
    },
    'memory-span': {
        'name': 'Memory Span',
        'domain': 'memory',
        'description': 'Remember and recall increasingly long sequences.',
        'instructions': 'Memorize the sequence shown, then reproduce it correctly.',
    },
    'n-back': {
        'name': 'N-Back',
        'domain': 'memory',
        'description': 'The gold standard of working memory training.',
        'instructions': 'Press when the current item matches what appeared N turns ago.',
    },
    'word-recall': {
        'name': 'Word Recall',
        'domain': 'memory',
        'description': 'Remember words from a list and identify them later.',
        'instructions': 'Study the word list carefully. Later, identify which words were on the original list.',
    },
    'spatial-memory': {
        'name': 'Spatial Memory',
        'domain': 'memory',
        'description': 'Remember the locations of objects in space.',
        'instructions': 'Memorize the positions of objects, then recall their locations.',
    },
    'visual-pairs': {
        'name': 'Visual Pairs',
        'domain': 'memory',
        'description': 'Find matching pairs of cards using your memory.',
        'instructions': 'Flip cards to find matching pairs. Remember card positions to make matches efficiently.',
    },
    # Attention
    'stroop-test': {
        'name': 'Stroop Test',
        'domain': 'attention',
        'description': 'Classic attention and inhibition test. Identify ink colors, not words.',
        'instructions': 'Select the INK COLOR of each word, ignoring what the word says.',
    },
    'visual-search': {
        'name': 'Visual Search',
        'domain': 'attention',
        'description': 'Find target items quickly among distractors.',
        'instructions': 'Find and tap all instances of the target item as quickly as possible.',
    },
    'sustained-attention': {
        'name': 'Sustained Attention',
        'domain': 'attention',
        'description': 'Maintain focus and respond to rare targets.',
        'instructions': 'Tap only when you see the target sequence. Stay vigilant!',
        'duration': 180,
    },
    'divided-attention': {
        'name': 'Divided Attention',
        'domain': 'attention',
        'description': 'Track multiple things simultaneously.',
        'instructions': 'Track the moving objects while responding to events in different areas.',
    },
    'flanker-task': {
        'name': 'Flanker Task',
        'domain': 'attention',
        'description': 'Focus on the center while ignoring distractions.',
        'instructions': 'Indicate the direction of the CENTER arrow only. Ignore the surrounding arrows.',
    },
    'change-detection': {
        'name': 'Change Detection',
        'domain': 'attention',
        'description': 'Spot changes between two images.',
        'instructions': 'Find what changed between the two images shown.',
    },
    # Processing speed
    'simple-reaction': {
        'name': 'Simple Reaction',
        'domain': 'speed',
        'description': 'Test your raw reaction speed.',
        'instructions': 'Wait for the signal, then respond as fast as possible. Be careful not to respond too early!',
    },
    'choice-reaction': {
        'name': 'Choice Reaction',
        'domain': 'speed',
        'description': 'Speed with decision-making.',
        'instructions': 'Quickly select the correct response based on what appears.',
    },
    'rapid-visual': {
        'name': 'Rapid Visual Processing',
        'domain': 'speed',
        'description': 'Process rapidly presented visual information.',
        'instructions': 'Detect target items from the rapidly flashing images.',
    },
    'symbol-matching': {
        'name': 'Symbol Matching',
        'domain': 'speed',
        'description': 'Rapidly identify if symbols match.',
        'instructions': 'Quickly decide if the symbols shown are the SAME or DIFFERENT.',
    },
    'color-tap': {
        'name': 'Color Tap',
        'domain': 'speed',
        'description': 'Tap colors as fast as possible.',
        'instructions': 'Tap the correct color as quickly as you can.',
    },
    'motion-tracking': {
        'name': 'Motion Tracking',
        'domain': 'speed',
        'description': 'Track moving objects accurately.',
        'instructions': 'Keep track of the highlighted objects as they move.',
    },
    # Problem solving
    'number-series': {
        'name': 'Number Series',
        'domain': 'problem_solving',
        'description': 'Find patterns and predict the next number.',
        'instructions': 'Identify the pattern in the number sequence and select what comes next.',
    },
    'matrix-reasoning': {
        'name': 'Matrix Reasoning',
        'domain': 'problem_solving',
        'description': 'Find the missing piece in visual patterns.',
        'instructions': 'Identify the pattern and select the missing piece.',
    },
    'tower-of-hanoi': {
        'name': 'Tower of Hanoi',
        'domain': 'problem_solving',
        'description': 'Classic planning puzzle. Move disks with strategy.',
        'instructions': 'Move all disks to the last peg. Only move one disk at a time, '
                        'and never place a larger disk on a smaller one.',
    },
    'pattern-completion': {
        'name': 'Pattern Completion',
        'domain': 'problem_solving',
        'description': 'Complete visual patterns.',
        'instructions': 'Select the correct piece to complete the pattern.',
    },
    'logical-deduction': {
        'name': 'Logical Deduction',
        'domain': 'problem_solving',
        'description': 'Solve logic puzzles using deductive reasoning.',
        'instructions': 'Use the clues to figure out the correct answer.',
    },
    'spatial-reasoning': {
        'name': 'Spatial Reasoning',
        'domain': 'problem_solving',
        'description': 'Identify rotated vs mirrored shapes.',
        'instructions': 'Determine which shapes are rotations of the reference (same) vs mirror images (different).',
    },
    'n-queens': {
        'name': 'N-Queens',
        'domain': 'problem_solving',
        'description': 'Place N queens on an NxN board so none attack each other.',
        'instructions': 'Place queens on the board such that no two queens can attack each other.',
        'plannable': False,
    },
    # Cognitive flexibility
    'task-switching': {
        'name': 'Task Switching',
        'domain': 'flexibility',
        'description': 'Rapidly switch between different rules.',
        'instructions': 'Follow the current rule shown. Rules will change - adapt quickly!',
    },
    'category-switching': {
        'name': 'Category Switching',
        'domain': 'flexibility',
        'description': 'Alternate between categorization criteria.',
        'instructions': 'Categorize items by the indicated dimension. Categories alternate!',
    },
    'reverse-stroop': {
        'name': 'Reverse Stroop',
        'domain': 'flexibility',
        'description': 'Do the opposite of the normal Stroop test.',
        'instructions': 'Read the WORD, ignoring its color.',
    },
    'wisconsin-card': {
        'name': 'Wisconsin Card Sort',
        'domain': 'flexibility',
        'description': 'Discover and adapt to changing rules.',
        'instructions': 'Sort cards by the hidden rule. The rule will change - figure it out from feedback!',
    },
    'trail-making': {
        'name': 'Trail Making',
        'domain': 'flexibility',
        'description': 'Alternate between sequences.',
        'instructions': 'Connect in order, alternating between numbers and letters: 1-A-2-B-3-C...',
    },
    'verbal-fluency': {
        'name': 'Verbal Fluency',
        'domain': 'flexibility',
        'description': 'Generate words based on criteria.',
        'instructions': 'Think of as many words as you can that fit the given criteria.',
        'duration': 60,
    },
}


def get_game(game_id: str) -> dict | None:
    """Get a game's registration as {id, name, domain, ...} or None."""
    data = GAMES.get(game_id)
    if data is None:
        return None
    return {
        'id': game_id,
        'name': data['name'],
        'domain': data['domain'],
        'description': data['description'],
        'instructions': data['instructions'],
        'practice_available': data.get('practice_available', True),
        'duration': data.get('duration'),
        'plannable': data.get('plannable', True),
    }


def get_games_by_domain(domain: str) -> list[dict]:
    return [get_game(game_id) for game_id, data in GAMES.items() if data['domain'] == domain]


def get_all_games() -> list[dict]:
    return [get_game(game_id) for game_id in GAMES]


def get_random_game(domain: str, rng=random) -> dict | None:
    """Pick one plannable game from a domain. Returns None for an unknown domain."""
    if domain not in DOMAINS:
        return None
    games = [game for game in get_games_by_domain(domain) if game['plannable']]
    if not games:
        return None
    return rng.choice(games)
