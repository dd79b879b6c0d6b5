"""
pagedemo — Application Package Initializer
===========================================

What: Marks the `pagedemo` directory as a Python package.
Who:  Imported by uvicorn (`pagedemo.main:app`), pytest, and the console script.

Architecture Note:

    ┌─────────────────────────────────────┐
    │       Routes (Page Router, Health)  │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       Views (ViewResolver)          │  ← view identifier → rendered HTML
    ├─────────────────────────────────────┤
    │       Templates (Jinja2 files)      │  ← external artifacts
    └─────────────────────────────────────┘

    Page handlers only choose a view identifier. Locating and rendering
    the template is the resolver's job, so handlers stay pure and can be
    tested without HTTP.
"""

__version__ = "1.0.0"
