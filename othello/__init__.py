"""Variable-size Othello engine: bitboard rules, evaluation, search and AI workers."""

import logging

from othello.config import CONFIG

logging.getLogger(__name__).setLevel(CONFIG.log_level)
logging.getLogger(__name__).addHandler(logging.NullHandler())
