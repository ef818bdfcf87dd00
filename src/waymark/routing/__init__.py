"""Routing — ordered route table with first-match path matching.

Routes are registered during setup and frozen when the router starts
navigating.
"""
