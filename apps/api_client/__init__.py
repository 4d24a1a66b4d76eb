from .client import ApiClient
from .schemas import ApiResult, Pagination

__all__ = ['ApiClient', 'ApiResult', 'Pagination']
