"""In-memory index and search over MagentaA11y accessibility acceptance criteria."""

__version__ = "1.0.0"
