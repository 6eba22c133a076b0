"""Desktop utilities: daily image download, serial record logging, a framed protocol and helpers."""

__version__ = "0.1.0"

__all__ = ["cube", "environment", "protocol", "recordlog", "wallpaper"]