"""
Glossterm
Glossary term shortcodes with popovers, footnotes and an aggregate table
"""

__version__ = "1.0.0"
