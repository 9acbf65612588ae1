"""Minecraft Java Edition protocol codecs, packets and a minimal asyncio server."""

__version__ = "0.1.0"