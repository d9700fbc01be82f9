"""Convert Apple .strings localization files to a CSV table and back."""

__version__ = "0.1.0"
