"""pgspec - instance specification synthesis for clustered PostgreSQL."""

__version__ = "0.1.0"
