"""Circuit Lab: breadboard circuit editor and DC simulator."""

__version__ = "0.1.0"
