"""Application layer for daily goals: calculation and profile updates."""
