"""Realtime backend for a two-team, turn-based grid tactics duel."""
