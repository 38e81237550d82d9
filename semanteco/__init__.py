"""SemantEco: modular SPARQL query composition for environmental data providers."""

__version__ = "1.0.0"
