"""Filesystem inspection and lightweight static analysis for Angular projects."""

__version__ = "0.1.0"
