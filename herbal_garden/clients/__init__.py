"""Clients for the hosted vector index and generative models."""

from .gemini import GeminiProvider, ImagePart, OpenAICompatibleProvider
from .generation import GenerationResult, TextGenerator, build_text_generator
from .pinecone import VectorIndexClient

__all__ = [
    "GeminiProvider",
    "GenerationResult",
    "ImagePart",
    "OpenAICompatibleProvider",
    "TextGenerator",
    "VectorIndexClient",
    "build_text_generator",
]
