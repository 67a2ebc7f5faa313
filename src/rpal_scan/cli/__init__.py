"""
rpal-scan Command-Line Interface
================================

This package provides the command-line driver for the scanner:

- **rpscan**: print the token stream of an RPAL source file

The tool is a Click-based CLI application.
"""

__all__ = ["rpscan"]
