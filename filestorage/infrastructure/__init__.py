"""
Infrastructure layer: stream helpers and storage backends.
"""
