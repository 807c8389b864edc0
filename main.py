#!/usr/bin/env python3
"""
Pokebattle - terminal team battles

Thin wrapper around the command line interface in the pokebattle package:
- roster management (up to six Pokemon, stored locally)
- interactive and simulated 6v6 battles against a random trainer
- a ranked local leaderboard

To run: python main.py battle
"""

from pokebattle.cli import main

if __name__ == "__main__":
    main()
