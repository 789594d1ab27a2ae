"""Bundled data files for dirdoc."""
