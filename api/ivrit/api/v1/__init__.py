"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from ivrit.api.v1.endpoints import hebrew, users, operations

api_router = APIRouter()

# Each router defines its own prefix
api_router.include_router(hebrew.router)
api_router.include_router(users.router)
api_router.include_router(operations.router)
