"""Pydantic request/response schemas for the LearnLoop API."""
