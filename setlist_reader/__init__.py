"""
Setlist reader core package.

Groups references to existing PDF documents into named, ordered setlists and
drives one reading position across them as if they were a single document.
It exposes the setlist dataclasses, a document viewer protocol with in-memory
and PyMuPDF implementations, the line-oriented save format, and the manager
that ties navigation and persistence together.
"""
