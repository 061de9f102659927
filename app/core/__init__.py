"""
Core functionality for the YouTube study notes application.

This package contains modules for resolving video transcripts,
formatting them with timestamps, and synthesizing structured notes.
"""
