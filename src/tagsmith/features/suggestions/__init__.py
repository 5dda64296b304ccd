"""Suggestion feature: prompts, reply parsing, and report persistence."""
