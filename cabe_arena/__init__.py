"""CaBE Arena scoring engine: Service Points Formula v5 and submission integrity heuristics."""

__version__ = "5.0.0"
