"""Main entry point when executing vidproxy as a package.

This allows running the package using python -m vidproxy.
"""

from vidproxy.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
