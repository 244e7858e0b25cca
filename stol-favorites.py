#!/usr/bin/env python3
"""
stol-favorites: local favourites store

Keeps a device-local list of favourited species (opaque taxon IDs plus the
time each was added) in ``<base-dir>/Favorites/favorites.sqlite``.

Usage:
    python stol-favorites.py --base-dir path/to/app-data/ toggle 42
    python stol-favorites.py --base-dir path/to/app-data/ list

This file is a thin wrapper around the cli package.
"""

import asyncio
from cli.commands import main

if __name__ == "__main__":
    asyncio.run(main())
