"""
Entry point for running the favourites CLI as a module.

Usage:
    python -m cli --base-dir path/to/app-data/ add 42
    python -m cli --base-dir path/to/app-data/ list
"""

import asyncio
from .commands import main

if __name__ == "__main__":
    asyncio.run(main())
