"""Game simulation for a small slime arena: vector math, collision, WAV parsing, actors and scenes."""

__version__ = "0.1.0"