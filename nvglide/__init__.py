"""State and animation logic for a graphical editor front end: easing, cursor, blink, effects, windows, fonts and settings."""

__version__ = "0.10.3"