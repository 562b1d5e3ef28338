"""Telegram bot that records beancount transactions step by step."""

__version__ = "0.4.0"
