from app.models.student import Student

__all__ = ['Student']
