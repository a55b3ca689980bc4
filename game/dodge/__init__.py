"""Triangle Dodger - pointer-driven avoidance game and its simulation core"""

from .dodge_env import DodgeEnv, run_random_episode
from .entities import Player, Pursuer, PursuerKind, Viewport
from .loop import GameLoop, ManualScheduler
from .pool import EntityPool
from .round import Phase, PhaseChange, RoundController, RoundResult
from .scores import HighScoreTable, JsonScoreStore, MemoryScoreStore
from .spawner import Spawner, spawn_interval, speed_multiplier

__all__ = [
    'DodgeEnv', 'run_random_episode',
    'Player', 'Pursuer', 'PursuerKind', 'Viewport',
    'GameLoop', 'ManualScheduler',
    'EntityPool',
    'Phase', 'PhaseChange', 'RoundController', 'RoundResult',
    'HighScoreTable', 'JsonScoreStore', 'MemoryScoreStore',
    'Spawner', 'spawn_interval', 'speed_multiplier',
]
