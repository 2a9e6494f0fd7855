"""Command-line client for the BioID Web Service LiveDetection extension."""

__version__ = "development"
