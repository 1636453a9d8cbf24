"""
Voice command clarification engine
"""
