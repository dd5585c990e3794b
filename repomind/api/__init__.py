"""
API module - FastAPI application and routes.

Run with: uvicorn repomind.api.main:app --reload
"""
