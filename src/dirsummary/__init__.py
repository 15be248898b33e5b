"""
dirsummary - A tool for snapshotting a codebase into one text file.

This package walks a directory tree, filters entries against an extension
whitelist and simplified .gitignore-style patterns, and writes a tree listing
followed by the contents of every selected file, ready to paste into an LLM.
"""

__version__ = "0.1.0"
__author__ = "dirsummary contributors"
