"""
Core domain models, money arithmetic, and quantity math.

Everything here is pure: no I/O, no process-wide state.
"""
