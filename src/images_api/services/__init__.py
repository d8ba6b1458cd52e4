"""
Service layer for the Images API.

Composes the storage adapter and the record store into the upload workflow.
"""
