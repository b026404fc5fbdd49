"""Core del adaptador NLP4J-Decode: dominio, configuración y servicios."""

__version__ = "1.0.0"
