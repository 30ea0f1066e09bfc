"""
Games module - Built-in card catalogs.

Each game has its own subpackage with:
- Card definitions
- Deck compositions
"""
