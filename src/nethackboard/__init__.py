# src/nethackboard/__init__.py

"""NetHackBoard: dashboard for the Nethack challenge leaderboard service."""

__version__ = "0.1.0"
