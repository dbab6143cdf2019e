"""Main entry point when executing netguard as a package.

This allows running the package using python -m netguard.
"""

from netguard.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
