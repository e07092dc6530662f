"""Shelltree - an interactive command interpreter built on a tree of named commands.

Input lines are split into chained statements, tokenized with quote support,
resolved against a hierarchical command namespace and dispatched to async or
plain handlers. User aliases are persisted to a YAML document between sessions.
"""
