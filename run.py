"""
HolyStik File Runner
====================
Execute .hstik source files from the command line.

Usage:
    python run.py <filename.hstik>
    python run.py --calc <expression>
    python run.py examples/house.hstik
"""
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from holystik.cli import run_calc, run_file


def main():
    if len(sys.argv) < 2:
        print("Stik Usage: python run.py <file.hstik> or python run.py --calc <expression>")
        sys.exit(1)

    if sys.argv[1] == "--calc":
        if len(sys.argv) < 3:
            print("Stik Calculator Usage: python run.py --calc <expression>")
            sys.exit(1)
        sys.exit(run_calc(" ".join(sys.argv[2:])))

    sys.exit(run_file(sys.argv[1]))


if __name__ == "__main__":
    main()
