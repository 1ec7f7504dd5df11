# run.py
# Launches the Star Battle solver from a source checkout.
# Once the project is installed (pip install -e .), the 'starbattle' command does the same.
import sys

from starbattle.cli import main

if __name__ == '__main__':
    sys.exit(main())
