#!/usr/bin/env python3
"""
Question Companion - Main Entry Point

Usage:
    python3 -m question_companion ask
    python3 -m question_companion summarize --question "..." --json
    python3 -m question_companion --help
"""

from question_companion.adapters.cli import app


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
