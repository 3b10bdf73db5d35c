"""Chess position representation, hashing, move rules, score classification and search data types."""

__version__ = "0.1.0"
__all__ = ["types", "attacks", "position", "rules", "score", "search"]