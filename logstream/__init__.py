"""
Logstream - live tail client for structured log streams
"""
