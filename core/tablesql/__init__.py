"""
tablesql - render parsed SQL table references back into SQL text.
"""
