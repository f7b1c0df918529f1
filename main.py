#!/usr/bin/env python3
"""
Main entry point for the Twitch command bot
"""

from cmdbot.main import run

if __name__ == "__main__":
    run()
