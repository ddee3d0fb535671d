# tests/unit/__init__.py
"""
Unit tests for Chirper.

Unit tests focus on individual functions, classes, and modules. Store-backed
tests run against a temporary SQLite file or the in-memory Supabase mock.
"""
