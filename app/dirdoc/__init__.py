"""dirdoc - Directory structure documentation.

Scans a project, records every directory and file together with a
human-written description, and keeps that record in sync with the
filesystem.
"""

__version__ = "0.1.0"
