# othello/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import os
import tomllib

# Positional weights per cell class, after http://uguisu.skr.jp/othello/5-1.html
#
#    0  1  2  3  ..
# 0: c  eC eA eB       30 -12  0 -1
# 1: eC eX iC iA      -12 -15 -3 -3
# 2: eA iC iX bC        0  -3  0 -1
# 3: eB iA bC bX       -1  -3 -1 -1
POSITIONAL_WEIGHTS = {
    "corner": 30,
    "edge_b": -1,
    "inner_edge": -3,
    "edge_c": -12,
    "edge_x": -15,
}

@dataclass
class SearchConfig:
    budget: int = 10_000  # evaluations per move for a bare AlphaBetaSelector
    weak_budget: int = 1_000
    medium_budget: int = 10_000
    strong_budget: int = 100_000
    stop_check_interval: int = 2048  # nodes between cancellation checks
    random_seed: Optional[int] = None

@dataclass
class EvalConfig:
    positional_weights: Dict[str, int] = field(default_factory=lambda: POSITIONAL_WEIGHTS.copy())
    mobility_weight: float = 0.1

@dataclass
class GameConfig:
    rows: int = 8
    cols: int = 8
    black_player: str = "human"
    white_player: str = "human"

@dataclass
class WorkerConfig:
    join_timeout: float = 2.0  # seconds to wait for a worker thread on finish

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    game: GameConfig = field(default_factory=GameConfig)
    worker: WorkerConfig = field(default_factory=WorkerConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "game", "worker"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if not hasattr(target, k):
                        continue
                    current = getattr(target, k)
                    # tables such as positional_weights merge over the defaults
                    if isinstance(current, dict) and isinstance(v, dict):
                        v = {**current, **v}
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("OTHELLO_CONFIG_TOML", "config.toml"))
# allow env override of the search budget for quick debugging
override_budget = os.environ.get("OTHELLO_SEARCH_BUDGET")
if override_budget:
    CONFIG.search.budget = int(override_budget)
