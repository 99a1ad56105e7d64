# src/nethackboard/routes/__init__.py

"""HTML routes served by the dashboard."""
