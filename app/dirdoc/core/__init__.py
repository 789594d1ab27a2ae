"""Core functionality for dirdoc.

Scanning, the structure document codec, diffing, description transfer,
validation, sorting and the synchronization pipeline.
"""
