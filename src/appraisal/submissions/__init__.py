"""Submission HTTP endpoints: anonymous intake and result view, operator console."""
