"""One-shot DeepSeek completion demo."""

__version__ = "0.1.0"
