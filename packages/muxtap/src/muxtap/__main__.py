"""Declarative tmux session manager.

Entry point for the muxtap command line.
"""

import logging

from .cli import run

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
)


def main():
    """Run muxtap with the process arguments."""
    run()


if __name__ == "__main__":
    main()
