"""Streaming tag-aware processing of model output text: a scanner, a processor and a demo."""

__version__ = "0.1.6"