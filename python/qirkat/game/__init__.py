"""Board state, move model and legality rules."""
