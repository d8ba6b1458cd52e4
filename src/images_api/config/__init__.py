"""
Configuration management for the Images API.

Contains the Pydantic settings for the HTTP server, the MongoDB record store
and the Cloudinary storage provider.
"""
