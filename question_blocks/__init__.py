"""Question block parser for generated mock-interview scripts."""

__version__ = "0.1.0"
