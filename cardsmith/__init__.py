"""Turn web pages into Anki flashcards."""

__version__ = "0.1.0"
