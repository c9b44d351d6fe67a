"""Game session services: multi-player games and their storage.

Routes and socket handlers import from here; the scoring rules themselves
live in ``yahtzee.services.scoring``.
"""
