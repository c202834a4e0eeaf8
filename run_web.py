#!/usr/bin/env python3
"""
Main entry point for the Matchday web API.

This script launches the Flask-based JSON server.
"""
import argparse
import logging

from matchday.ui.web_app import run_web_app
from matchday.utils import setup_logging

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the Matchday API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=7122)
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--log-to-file", action="store_true")
    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO,
                  log_to_file=args.log_to_file)
    run_web_app(host=args.host, port=args.port, debug=args.debug)
