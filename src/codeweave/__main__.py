"""Entry point for running Codeweave as a module.

Usage:
    python -m codeweave [command] [options]

Example:
    python -m codeweave process src/ --filter-type methods
    python -m codeweave inspect Calculator.java
"""

from codeweave.cli import app

if __name__ == "__main__":
    app()
