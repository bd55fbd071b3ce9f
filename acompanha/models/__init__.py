"""
API request / response schemas.
"""
