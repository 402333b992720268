"""
SDK for Movie Budget AI.

Provides access to the local text-generation endpoint.
"""

from .ollama_client import OllamaClient

__all__ = ["OllamaClient"]
