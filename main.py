#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--rows R] [--cols C] [--mines M]
    python main.py demo [--games N] [--delay S] [--seed X]
"""
from minefield.cli import main


if __name__ == "__main__":
    main()
