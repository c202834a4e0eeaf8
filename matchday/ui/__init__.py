"""
UI package for Matchday.

This package contains the Flask JSON API that drives the engine.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
