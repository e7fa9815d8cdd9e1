"""
Colony-Evo: a generational evolutionary simulation engine

Fixed-size populations are evaluated concurrently in colonies, the top
performers are paired at random and recombined, and their children are
replicated to refill the next generation.
"""

__version__ = "0.1.0"
