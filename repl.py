"""
HolyStik REPL launcher
======================
Usage:
    python repl.py
"""
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from holystik.repl import run_repl


if __name__ == "__main__":
    run_repl()
