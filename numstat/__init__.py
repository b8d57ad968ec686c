"""
numstat: descriptive statistics for a stream of numbers.
"""
