"""
API layer - DTOs, mappers and business exceptions.
"""
