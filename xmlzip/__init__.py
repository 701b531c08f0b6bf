"""
xmlzip - split large XML documents into a zip of standalone fragments

Each fragment holds at most a fixed number of occurrences of one split
element and repeats the document's front matter, so every fragment is a
valid document on its own.
"""

__version__ = "0.1.0"
