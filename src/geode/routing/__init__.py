"""Routing — anchored regex routes with newest-first handler stacks.

Routes are registered during setup and frozen when the app handles its
first request.
"""
