"""
Adapter layer for the Images API.

Contains the storage provider abstraction and its Cloudinary implementation.
"""
