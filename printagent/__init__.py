"""
printagent - folder-based print job processor

Watches a queue directory for job descriptor files, renders each one through a
named template into a PDF, then prints it or keeps it on disk. Every job file
is consumed exactly once and no rendered document is ever lost.

Architecture:
- Intake Context: Job descriptor parsing and identity assignment
- Templating Context: Template registry and template source rendering
- Rendering Context: PDF compilation with an external LaTeX engine
- Printing Context: Printer aliases, printer directory and print submission
- Pipeline Context: Per-job state machine and queue watcher
"""

__version__ = "0.1.0"
