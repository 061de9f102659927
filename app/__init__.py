"""
YouTube Study Notes Application.

This application fetches the transcript of a YouTube video through several
fallback strategies and turns it into structured study notes using LLM models.
"""

from app.config import config

__version__ = config.APP_VERSION
