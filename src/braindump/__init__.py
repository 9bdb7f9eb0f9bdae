"""
Braindump: local-first capture for loose thoughts.

A small note-capture tool that provides:
- Zero-friction capture from the terminal or an MCP client
- Rule-based categorization (keywords + regex patterns, no API calls)
- A filterable list for review, edit and delete
"""

__version__ = "0.1.0"
