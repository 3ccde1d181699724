"""
Custom Labels Translator Tools Package

This package contains the building blocks of the custom labels translator.
These tools handle:
- Salesforce metadata parsing and writing (CustomLabels.labels, *.translation)
- Excel spreadsheet reading and writing
- Translation table building, merging and printing
- The export and import commands
"""

__version__ = "1.0.0"
