"""
API Module - FastAPI application for the provider gateway and studio sessions.
"""
