"""Top-level package for the Route Assistant project.

A rule-based conversational assistant that turns free-form travel
requests into structured queries, tracks dialogue state per session and
ranks bus and train options between Indian cities.
"""

__version__ = "0.1.0"
