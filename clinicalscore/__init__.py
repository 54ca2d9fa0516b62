"""Clinical questionnaire calculators."""

__version__ = "0.1.0"
