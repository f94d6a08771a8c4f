"""Leaderboard API: runs, categories and leaderboards over FastAPI and SQLModel."""
