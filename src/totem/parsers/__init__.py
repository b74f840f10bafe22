"""Parsers for third-party exports: rosters, HotSchedules, time punch, sales and labor."""
