"""
Centralized path helpers.
"""
from __future__ import annotations
import os
from pathlib import Path

DATA_DIR_NAME = ".pokebattle"
ROSTER_FILENAME = "roster.json"
LEADERBOARD_FILENAME = "leaderboard.json"

def data_dir() -> Path:
    home = Path(os.path.expanduser("~"))
    path = home / DATA_DIR_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path

def roster_path() -> Path:
    return data_dir() / ROSTER_FILENAME

def leaderboard_path() -> Path:
    return data_dir() / LEADERBOARD_FILENAME
