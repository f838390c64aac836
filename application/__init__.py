"""
Application Layer for the workout logbook.

This package contains:
- ports/: Abstract interfaces (what the domain needs from the outside)
- use_cases/: The live workout session and Markdown export workflows
"""
