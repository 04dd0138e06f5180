"""
Core utilities shared by the index client, pass store and assemblers.

Holds the error taxonomy every entry point raises.
"""
