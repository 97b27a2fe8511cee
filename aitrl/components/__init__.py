"""
Assessment flows built on the shared structured assessment pipeline.
"""
