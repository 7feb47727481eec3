"""Compiler building blocks for a hardware-accelerator language."""

__version__ = "0.1.0"