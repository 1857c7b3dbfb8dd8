"""
Core package for the indicator dashboard application.

Submodules provide the remote data client, the fallback loader, record
submission, value formatting, and user interface rendering helpers that are
orchestrated by the top-level `app.py`.
"""
