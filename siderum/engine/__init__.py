"""Chart evaluation engines."""
