from app.routes.efforts import router as efforts_router

__all__ = [
    'efforts_router',
]
