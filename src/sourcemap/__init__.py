"""
source-map - export a project's source tree as a single Markdown document.

The directory tree comes first, then the content of every file selected by a
language profile, with the root ``.gitignore`` honoured along the way.
"""

__version__ = "0.1.0"
